from __future__ import annotations
import math
from typing import List
import cairo
from .element import GraphicElement
from .geometry import ConnectionPoint, GripType, Point, Rect, ShapeAnchor


# Grips that move an edge of a box, per side.
LEFT_GRIPS = {GripType.TOP_LEFT, GripType.LEFT_MIDDLE, GripType.BOTTOM_LEFT}
RIGHT_GRIPS = {
    GripType.TOP_RIGHT,
    GripType.RIGHT_MIDDLE,
    GripType.BOTTOM_RIGHT,
}
TOP_GRIPS = {GripType.TOP_LEFT, GripType.TOP_MIDDLE, GripType.TOP_RIGHT}
BOTTOM_GRIPS = {
    GripType.BOTTOM_LEFT,
    GripType.BOTTOM_MIDDLE,
    GripType.BOTTOM_RIGHT,
}


class Box(GraphicElement):
    """
    A rectangular shape. Offers eight resize anchors and a connection
    point in the middle of each side.
    """

    def get_anchors(self) -> List[ShapeAnchor]:
        r = self.display_rectangle
        mx, my = r.center
        positions = [
            (GripType.TOP_LEFT, r.x, r.y),
            (GripType.TOP_MIDDLE, mx, r.y),
            (GripType.TOP_RIGHT, r.right, r.y),
            (GripType.LEFT_MIDDLE, r.x, my),
            (GripType.RIGHT_MIDDLE, r.right, my),
            (GripType.BOTTOM_LEFT, r.x, r.bottom),
            (GripType.BOTTOM_MIDDLE, mx, r.bottom),
            (GripType.BOTTOM_RIGHT, r.right, r.bottom),
        ]
        return [
            ShapeAnchor(grip, Rect.around(Point(x, y), self.anchor_size))
            for grip, x, y in positions
        ]

    def get_connection_points(self) -> List[ConnectionPoint]:
        r = self.display_rectangle
        mx, my = r.center
        return [
            ConnectionPoint(Point(r.x, my), GripType.LEFT_MIDDLE),
            ConnectionPoint(Point(r.right, my), GripType.RIGHT_MIDDLE),
            ConnectionPoint(Point(mx, r.y), GripType.TOP_MIDDLE),
            ConnectionPoint(Point(mx, r.bottom), GripType.BOTTOM_MIDDLE),
        ]

    def move_anchor(self, grip: GripType, delta: Point):
        r = self.display_rectangle
        left, top, right, bottom = r.x, r.y, r.right, r.bottom
        if grip in LEFT_GRIPS:
            left = min(left + delta.x, right - self.anchor_size)
        if grip in RIGHT_GRIPS:
            right = max(right + delta.x, left + self.anchor_size)
        if grip in TOP_GRIPS:
            top = min(top + delta.y, bottom - self.anchor_size)
        if grip in BOTTOM_GRIPS:
            bottom = max(bottom + delta.y, top + self.anchor_size)
        self.display_rectangle = Rect(left, top, right - left, bottom - top)


class Connector(GraphicElement):
    """
    A straight line between a start and an end point. Both endpoints are
    handles that can be attached to the connection points of other shapes.
    """

    is_connector = True

    def __init__(self, start: Point, end: Point, **kwargs):
        self.start: Point = start
        self.end: Point = end
        rect = Rect.from_points(start, end)
        super().__init__(rect.x, rect.y, rect.width, rect.height, **kwargs)

    @property
    def display_rectangle(self) -> Rect:
        """Derived from the endpoints, so it cannot be assigned."""
        return Rect.from_points(self.start, self.end)

    def get_anchors(self) -> List[ShapeAnchor]:
        size = self.anchor_size
        return [
            ShapeAnchor(GripType.START, Rect.around(self.start, size)),
            ShapeAnchor(GripType.END, Rect.around(self.end, size)),
        ]

    def get_connection_points(self) -> List[ConnectionPoint]:
        return [
            ConnectionPoint(self.start, GripType.START),
            ConnectionPoint(self.end, GripType.END),
        ]

    def distance_to(self, point: Point) -> float:
        """Distance from `point` to the line segment."""
        sx, sy = self.start
        ex, ey = self.end
        dx, dy = ex - sx, ey - sy
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            return math.hypot(point.x - sx, point.y - sy)
        t = ((point.x - sx) * dx + (point.y - sy) * dy) / length_sq
        t = max(0.0, min(1.0, t))
        return math.hypot(point.x - (sx + t * dx), point.y - (sy + t * dy))

    def is_selectable(self, point: Point) -> bool:
        tolerance = self.anchor_size // 2 + self.line_width
        return self.distance_to(point) <= tolerance

    def move(self, delta: Point):
        self.start = self.start + delta
        self.end = self.end + delta

    def move_anchor(self, grip: GripType, delta: Point):
        if grip is GripType.START:
            self.start = self.start + delta
        elif grip is GripType.END:
            self.end = self.end + delta
        else:
            self.move(delta)

    def draw(self, ctx: cairo.Context):
        ctx.set_source_rgba(*self.border)
        ctx.set_line_width(self.line_width)
        ctx.move_to(*self.start)
        ctx.line_to(*self.end)
        ctx.stroke()

    def draw_selection(self, ctx: cairo.Context):
        # The anchors at both ends mark a selected line.
        pass
