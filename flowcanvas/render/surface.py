from __future__ import annotations
import logging
import sys
from typing import List, Optional, Tuple
import cairo
from blinker import Signal
from ..config import SnapConfig
from ..core.diagram import Diagram
from ..core.element import RGBA, GraphicElement
from ..core.geometry import Rect
from ..canvas.repaint import (
    DrawBottomToTop,
    EraseRegion,
    Redraw,
    RepaintCommand,
    UpdateScreen,
)

logger = logging.getLogger(__name__)


class SurfaceRenderer:
    """
    Applies repaint commands to an offscreen cairo surface holding the
    painted diagram.

    The surface plays the role of the back buffer. "Updating the screen"
    records the damaged rectangle and sends `screen_updated`, which a host
    widget can use to copy that part of the surface to its window.
    """

    def __init__(
        self,
        diagram: Diagram,
        width: int,
        height: int,
        config: Optional[SnapConfig] = None,
        background: RGBA = (1, 1, 1, 1),
    ):
        self.diagram = diagram
        self.config = config or SnapConfig()
        self.background: RGBA = background
        self.surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
        self.damage: List[Rect] = []

        self.screen_updated = Signal()

    def size(self) -> Tuple[int, int]:
        return self.surface.get_width(), self.surface.get_height()

    def _marker_size(self) -> int:
        return self.config.connection_point_marker_size

    def _clip(self, ctx: cairo.Context, region: Rect):
        x, y, w, h = region.as_tuple()
        ctx.rectangle(x, y, w, h)
        ctx.clip()

    def paint_all(self):
        """Repaints the whole diagram."""
        logger.debug(f"Painting {len(self.diagram)} elements")
        width, height = self.size()
        region = Rect(0, 0, width, height)
        self.erase(region)
        self.draw(self.diagram.bottom_to_top(self.diagram), region)
        self.update_screen(region)

    def erase(self, region: Optional[Rect]):
        if region is None:
            return
        ctx = cairo.Context(self.surface)
        self._clip(ctx, region)
        ctx.set_source_rgba(*self.background)
        ctx.set_operator(cairo.OPERATOR_SOURCE)
        ctx.paint()

    def draw(self, elements: List[GraphicElement], region: Optional[Rect]):
        ctx = cairo.Context(self.surface)
        if region is not None:
            self._clip(ctx, region)
        for element in elements:
            element.render(ctx, self._marker_size())

    def update_screen(self, region: Optional[Rect]):
        if region is None:
            return
        self.surface.flush()
        self.damage.append(region)
        self.screen_updated.send(self, region=region)

    def redraw(
        self,
        element: GraphicElement,
        extra_width: int = 0,
        extra_height: int = 0,
    ):
        """
        Repaints one element in place. Elements overlapping it are drawn
        again as well, in painting order.
        """
        region = element.update_rectangle(extra_width, extra_height)
        self.erase(region)
        self.draw(self.diagram.intersecting(region), region)
        self.update_screen(region)

    def apply(self, commands: List[RepaintCommand]):
        for command in commands:
            if isinstance(command, EraseRegion):
                self.erase(command.get_region())
            elif isinstance(command, DrawBottomToTop):
                self.draw(list(command.elements), command.get_region())
            elif isinstance(command, UpdateScreen):
                self.update_screen(command.get_region())
            elif isinstance(command, Redraw):
                self.redraw(
                    command.element,
                    command.extra_width,
                    command.extra_height,
                )
            else:
                raise TypeError(f"Unknown repaint command {command!r}")

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Returns the (r, g, b, a) bytes of one pixel of the surface."""
        self.surface.flush()
        stride = self.surface.get_stride()
        data = self.surface.get_data()
        offset = y * stride + x * 4
        # ARGB32 pixels are native-endian 32 bit words
        pixel = bytes(data[offset:offset + 4])
        if sys.byteorder == "little":
            b, g, r, a = pixel
        else:
            a, r, g, b = pixel
        return r, g, b, a
