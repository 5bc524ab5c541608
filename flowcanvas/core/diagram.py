from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional
from blinker import Signal
from .connection import ConnectionGraph
from .element import GraphicElement
from .geometry import Point, Rect

logger = logging.getLogger(__name__)


class Diagram:
    """
    The ordered collection of elements on a canvas and the connection
    graph between them.

    `elements` is kept front-to-back: index 0 is the topmost element and
    wins hit tests. Painting walks the list in reverse.
    """

    def __init__(self, viewport: Optional[Rect] = None):
        self.elements: List[GraphicElement] = []
        self.connections = ConnectionGraph()
        # None means every element counts as on screen
        self.viewport: Optional[Rect] = viewport

        self.element_added = Signal()
        self.element_removed = Signal()

    def __iter__(self) -> Iterator[GraphicElement]:
        return iter(list(self.elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, element: object) -> bool:
        return element in self.elements

    def add(self, element: GraphicElement, index: int = 0) -> GraphicElement:
        """Adds an element, on top of all others by default."""
        if element in self.elements:
            return element
        self.elements.insert(index, element)
        self.element_added.send(self, element=element)
        return element

    def remove(self, element: GraphicElement):
        if element not in self.elements:
            return
        self.connections.remove_element(element)
        self.elements.remove(element)
        logger.debug(f"Removed {element}")
        self.element_removed.send(self, element=element)

    def hit_test(self, point: Point) -> Optional[GraphicElement]:
        """Returns the topmost element selectable at `point`."""
        for element in self.elements:
            if element.is_selectable(point):
                return element
        return None

    def bottom_to_top(
        self, elements: Iterable[GraphicElement]
    ) -> List[GraphicElement]:
        """Sorts `elements` into painting order."""
        wanted = set(elements)
        return [e for e in reversed(self.elements) if e in wanted]

    def intersecting(self, rect: Rect) -> List[GraphicElement]:
        """
        Returns the elements whose painted region overlaps `rect`, in
        painting order.
        """
        return [
            e
            for e in reversed(self.elements)
            if e.update_rectangle().intersects(rect)
        ]

    def affected_by(self, element: GraphicElement) -> List[GraphicElement]:
        """
        Returns every element that must be repainted together with
        `element` (itself included) for overlapping shapes to composite
        correctly.
        """
        region = element.update_rectangle()
        affected = self.intersecting(region)
        if element not in affected:
            affected.append(element)
        return affected

    def move_all(self, delta: Point):
        for element in self.elements:
            element.move(delta)
