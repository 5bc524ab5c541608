from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, Optional, Tuple


def sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class Point:
    """An integer canvas coordinate. Also used for deltas."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def delta(self, other: Point) -> Point:
        """Returns the displacement from `other` to this point."""
        return self - other

    def is_empty(self) -> bool:
        return self.x == 0 and self.y == 0

    def is_near(self, other: Point, distance: int) -> bool:
        """True if both axes are within `distance` of `other`."""
        return (
            abs(self.x - other.x) <= distance
            and abs(self.y - other.y) <= distance
        )

    def distance_squared(self, other: Point) -> int:
        dx, dy = self.x - other.x, self.y - other.y
        return dx * dx + dy * dy

    def signs(self) -> Tuple[int, int]:
        return sign(self.x), sign(self.y)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rect size must not be negative: {self.width}x{self.height}"
            )

    @classmethod
    def from_points(cls, p1: Point, p2: Point) -> Rect:
        """Returns the smallest rect containing both points."""
        x, y = min(p1.x, p2.x), min(p1.y, p2.y)
        return cls(x, y, abs(p2.x - p1.x), abs(p2.y - p1.y))

    @classmethod
    def around(cls, center: Point, size: int) -> Rect:
        half = size // 2
        return cls(center.x - half, center.y - half, size, size)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    def grow(self, dx: int, dy: Optional[int] = None) -> Rect:
        dy = dx if dy is None else dy
        return Rect(
            self.x - dx, self.y - dy, self.width + 2 * dx, self.height + 2 * dy
        )

    def offset(self, delta: Point) -> Rect:
        return Rect(
            self.x + delta.x, self.y + delta.y, self.width, self.height
        )

    def contains(self, point: Point) -> bool:
        """Edges count as inside."""
        return (
            self.x <= point.x <= self.right
            and self.y <= point.y <= self.bottom
        )

    def intersects(self, other: Rect) -> bool:
        return (
            self.x <= other.right
            and other.x <= self.right
            and self.y <= other.bottom
            and other.y <= self.bottom
        )

    def union(self, other: Rect) -> Rect:
        x, y = min(self.x, other.x), min(self.y, other.y)
        right = max(self.right, other.right)
        bottom = max(self.bottom, other.bottom)
        return Rect(x, y, right - x, bottom - y)

    @staticmethod
    def union_all(rects: Iterable[Rect]) -> Optional[Rect]:
        result = None
        for rect in rects:
            result = rect if result is None else result.union(rect)
        return result

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


class GripType(Enum):
    """Named handles on an element."""

    NONE = auto()
    TOP_LEFT = auto()
    TOP_MIDDLE = auto()
    TOP_RIGHT = auto()
    LEFT_MIDDLE = auto()
    RIGHT_MIDDLE = auto()
    BOTTOM_LEFT = auto()
    BOTTOM_MIDDLE = auto()
    BOTTOM_RIGHT = auto()
    # Connector endpoints
    START = auto()
    END = auto()

    def matches(self, other: GripType) -> bool:
        """NONE acts as a wildcard."""
        return self is GripType.NONE or self is other


@dataclass(frozen=True)
class ConnectionPoint:
    point: Point
    type: GripType = GripType.NONE


@dataclass(frozen=True)
class ShapeAnchor:
    """A draggable handle of an element."""

    type: GripType
    rect: Rect

    def near(self, point: Point) -> bool:
        return self.rect.contains(point)
