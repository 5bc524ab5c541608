from __future__ import annotations
import uuid
from abc import abstractmethod
from typing import Any, List, Optional, Protocol, Tuple
import cairo
from .geometry import ConnectionPoint, GripType, Point, Rect, ShapeAnchor

RGBA = Tuple[float, float, float, float]


class Selectable(Protocol):
    selected: bool

    @property
    @abstractmethod
    def display_rectangle(self) -> Rect:
        raise NotImplementedError

    @abstractmethod
    def is_selectable(self, point: Point) -> bool:
        raise NotImplementedError


class Highlightable(Protocol):
    show_anchors: bool
    show_connection_points: bool

    @abstractmethod
    def get_anchors(self) -> List[ShapeAnchor]:
        raise NotImplementedError


class Connectable(Protocol):
    is_connector: bool

    @abstractmethod
    def get_connection_points(self) -> List[ConnectionPoint]:
        raise NotImplementedError

    @abstractmethod
    def on_screen(self, viewport: Optional[Rect]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def move(self, delta: Point):
        raise NotImplementedError

    @abstractmethod
    def move_anchor(self, grip: GripType, delta: Point):
        raise NotImplementedError


class GraphicElement:
    """
    Base class for shapes placed on a diagram. It satisfies the
    Selectable, Highlightable and Connectable protocols and knows how to
    paint itself, including the interaction overlays (selection frame,
    anchors and connection point markers), onto a cairo context.

    Subclasses provide the geometry: anchors, connection points, hit
    testing and how a handle drag reshapes them.
    """

    is_connector: bool = False

    def __init__(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        name: str = "",
        background: RGBA = (1, 1, 1, 1),
        border: RGBA = (0, 0, 0, 1),
        line_width: int = 1,
        anchor_size: int = 6,
        data: Any = None,
    ):
        self.uid: str = str(uuid.uuid4())
        self.name: str = name or self.__class__.__name__
        self._rect: Rect = Rect(int(x), int(y), int(width), int(height))
        self.background: RGBA = background
        self.border: RGBA = border
        self.line_width: int = line_width
        self.anchor_size: int = anchor_size
        self.data: Any = data

        # UI interaction state
        self.selected: bool = False
        self.show_anchors: bool = False
        self.show_connection_points: bool = False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name!r}, "
            f"{self.display_rectangle})"
        )

    @property
    def display_rectangle(self) -> Rect:
        return self._rect

    @display_rectangle.setter
    def display_rectangle(self, rect: Rect):
        self._rect = rect

    def update_rectangle(
        self, extra_width: int = 0, extra_height: int = 0
    ) -> Rect:
        """
        The screen region touched when this element is painted, including
        anchors that stick out over its border.
        """
        border = self.anchor_size // 2 + self.line_width
        return self.display_rectangle.grow(
            border + extra_width, border + extra_height
        )

    def get_anchors(self) -> List[ShapeAnchor]:
        return []

    def get_connection_points(self) -> List[ConnectionPoint]:
        return []

    def is_selectable(self, point: Point) -> bool:
        return self.display_rectangle.grow(self.anchor_size // 2).contains(
            point
        )

    def on_screen(self, viewport: Optional[Rect]) -> bool:
        if viewport is None:
            return True
        return viewport.intersects(self.display_rectangle)

    def move(self, delta: Point):
        self._rect = self._rect.offset(delta)

    def move_anchor(self, grip: GripType, delta: Point):
        """Reshapes the element by dragging the handle `grip`."""
        self.move(delta)

    def render(self, ctx: cairo.Context, marker_size: int = 3):
        ctx.save()
        self.draw(ctx)
        if self.selected:
            self.draw_selection(ctx)
        if self.show_anchors or self.selected:
            self.draw_anchors(ctx)
        if self.show_connection_points:
            self.draw_connection_points(ctx, marker_size)
        ctx.restore()

    def draw(self, ctx: cairo.Context):
        x, y, w, h = self.display_rectangle.as_tuple()
        ctx.set_source_rgba(*self.background)
        ctx.rectangle(x, y, w, h)
        ctx.fill_preserve()
        ctx.set_source_rgba(*self.border)
        ctx.set_line_width(self.line_width)
        ctx.stroke()

    def draw_selection(self, ctx: cairo.Context):
        x, y, w, h = self.display_rectangle.as_tuple()
        ctx.save()
        ctx.set_source_rgb(0.4, 0.4, 0.4)
        ctx.set_line_width(1)
        ctx.set_dash((5, 5))
        ctx.rectangle(x, y, w, h)
        ctx.stroke()
        ctx.restore()

    def draw_anchors(self, ctx: cairo.Context):
        ctx.save()
        ctx.set_line_width(1)
        for anchor in self.get_anchors():
            x, y, w, h = anchor.rect.as_tuple()
            ctx.rectangle(x, y, w, h)
            ctx.set_source_rgb(1, 1, 1)
            ctx.fill_preserve()
            ctx.set_source_rgb(0.2, 0.2, 0.2)
            ctx.stroke()
        ctx.restore()

    def draw_connection_points(self, ctx: cairo.Context, marker_size: int):
        ctx.save()
        ctx.set_source_rgb(0.1, 0.4, 0.9)
        ctx.set_line_width(1)
        for cp in self.get_connection_points():
            # Draw an "x" over each point
            x, y = cp.point
            ctx.move_to(x - marker_size, y - marker_size)
            ctx.line_to(x + marker_size, y + marker_size)
            ctx.move_to(x + marker_size, y - marker_size)
            ctx.line_to(x - marker_size, y + marker_size)
        ctx.stroke()
        ctx.restore()
