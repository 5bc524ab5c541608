from __future__ import annotations
import logging
from typing import List, Optional, Tuple
from blinker import Signal
from ..core.diagram import Diagram
from ..core.element import GraphicElement
from ..core.geometry import Point
from .repaint import RepaintCommand, repaint_region

logger = logging.getLogger(__name__)


class SelectionManager:
    """
    Tracks the single selected element of a diagram. Changing the
    selection repaints every element overlapping the affected shapes,
    bottom to top, so overlapping shapes composite correctly.
    """

    def __init__(self, diagram: Diagram):
        self.diagram = diagram
        self.selected_element: Optional[GraphicElement] = None

        # Sent with element=None when the selection is cleared
        self.selection_changed = Signal()

    def hit_test(self, point: Point) -> Optional[GraphicElement]:
        return self.diagram.hit_test(point)

    def select(
        self, element: GraphicElement, notify: bool = True
    ) -> List[RepaintCommand]:
        commands = self.deselect_current()
        element.selected = True
        self.selected_element = element
        logger.debug(f"Selected {element}")
        commands += repaint_region(self.diagram, element.update_rectangle())
        if notify:
            self.selection_changed.send(self, element=element)
        return commands

    def select_at(
        self, point: Point, notify: bool = True
    ) -> Tuple[Optional[GraphicElement], List[RepaintCommand]]:
        element = self.hit_test(point)
        if element is None:
            return None, []
        return element, self.select(element, notify=notify)

    def deselect_current(self) -> List[RepaintCommand]:
        element = self.selected_element
        if element is None:
            return []
        element.selected = False
        self.selected_element = None
        logger.debug(f"Deselected {element}")
        return repaint_region(self.diagram, element.update_rectangle())

    def forget(self, element: GraphicElement) -> bool:
        """
        Drops `element` from the selection without repainting, for an
        element that already left the diagram. Returns True if it was
        selected.
        """
        if self.selected_element is not element:
            return False
        element.selected = False
        self.selected_element = None
        return True
