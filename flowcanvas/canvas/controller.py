from __future__ import annotations
import logging
from typing import Iterable, List, Optional
from blinker import Signal
from ..config import SnapConfig
from ..core.diagram import Diagram
from ..core.element import GraphicElement
from ..core.geometry import GripType, Point, Rect, ShapeAnchor
from .pointer import PointerEvent, PointerState
from .repaint import (
    Redraw,
    Renderer,
    RepaintCommand,
    covered_region,
    repaint_region,
)
from .selection import SelectionManager
from .snap import SnapDetector, SnapInfo, SnapResult

logger = logging.getLogger(__name__)


class CanvasController:
    """
    Turns pointer events on a diagram into selection changes, moves and
    connector snapping.

    Each handler runs to completion synchronously and returns the repaint
    commands it produced. If a renderer is given, the commands are also
    applied to it before returning.
    """

    def __init__(
        self,
        diagram: Diagram,
        config: Optional[SnapConfig] = None,
        renderer: Optional[Renderer] = None,
    ):
        self.diagram = diagram
        self.config = config or SnapConfig()
        self.renderer = renderer
        self.selection = SelectionManager(diagram)
        self.snap_detector = SnapDetector(diagram, self.config)

        # --- Interaction State ---
        self.selected_anchor: Optional[ShapeAnchor] = None
        self.pointer_down: bool = False
        self.dragging: bool = False
        self.mouse_position: Point = Point(0, 0)
        self.showing_anchors_element: Optional[GraphicElement] = None

        # --- Signals ---
        self.selection_changed: Signal = self.selection.selection_changed
        self.selection_updated = Signal()

        diagram.element_removed.connect(self._on_element_removed)

    @property
    def selected_element(self) -> Optional[GraphicElement]:
        return self.selection.selected_element

    @property
    def currently_near(self) -> List[SnapInfo]:
        return self.snap_detector.currently_near

    @property
    def state(self) -> PointerState:
        return PointerState.of(
            self.pointer_down, self.dragging, self.selected_anchor
        )

    def _emit(self, commands: List[RepaintCommand]) -> List[RepaintCommand]:
        if self.renderer is not None and commands:
            self.renderer.apply(commands)
        return commands

    def on_pointer_down(self, event: PointerEvent) -> List[RepaintCommand]:
        if not event.is_primary:
            return []

        self.pointer_down = True
        commands = self.selection.deselect_current()
        element, selected = self.selection.select_at(
            event.location, notify=False
        )
        commands += selected
        self.selected_anchor = None
        if element is not None:
            self.selected_anchor = next(
                (
                    a
                    for a in element.get_anchors()
                    if a.near(event.location)
                ),
                None,
            )
        self.selection_changed.send(self, element=element)
        self.dragging = element is not None
        self.mouse_position = event.location
        logger.debug(f"Pointer down at {event.location}: {self.state.name}")
        return self._emit(commands)

    def on_pointer_up(self, event: PointerEvent) -> List[RepaintCommand]:
        if not event.is_primary:
            return []
        return self._emit(self._end_gesture())

    def cancel(self) -> List[RepaintCommand]:
        """
        Ends the current gesture without a pointer-up, e.g. when the host
        window loses focus or pointer capture mid-drag. The selection is
        kept; drag state and all highlighting are cleared.
        """
        logger.debug(f"Gesture cancelled in state {self.state.name}")
        commands = self._end_gesture()
        commands += self._set_hover(None)
        return self._emit(commands)

    def _end_gesture(self) -> List[RepaintCommand]:
        self.selected_anchor = None
        self.pointer_down = False
        self.dragging = False
        return self.snap_detector.clear()

    def on_pointer_move(self, event: PointerEvent) -> List[RepaintCommand]:
        delta = event.location.delta(self.mouse_position)

        # A click can arrive together with a move to the same location.
        # Handling it would detach connectors that did not move.
        if delta.is_empty():
            return []

        self.mouse_position = event.location
        state = self.state
        if state is PointerState.DRAGGING_ANCHOR:
            commands = self.drag_selected_anchor(delta)
        elif state is PointerState.DRAGGING_ELEMENT:
            commands = self.drag_selected_element(delta)
        elif state is PointerState.PAN:
            commands = self.move_all_elements(delta)
        else:
            commands = self._set_hover(self.diagram.hit_test(event.location))
        return self._emit(commands)

    def _set_hover(
        self, element: Optional[GraphicElement]
    ) -> List[RepaintCommand]:
        if element is self.showing_anchors_element:
            return []
        commands: List[RepaintCommand] = []
        if self.showing_anchors_element is not None:
            self.showing_anchors_element.show_anchors = False
            commands.append(Redraw(self.showing_anchors_element))
            self.showing_anchors_element = None
        if element is not None:
            element.show_anchors = True
            commands.append(Redraw(element))
            self.showing_anchors_element = element
        return commands

    def drag_selected_anchor(self, delta: Point) -> List[RepaintCommand]:
        element, anchor = self.selected_element, self.selected_anchor
        if element is None or anchor is None:
            return []

        # Only connector handles snap; other anchors reshape freely.
        if element.is_connector:
            result, commands = self.snap_detector.snap(
                element, anchor.type, delta
            )
        else:
            result, commands = SnapResult(False, delta), []
        before = covered_region([element])
        element.move_anchor(anchor.type, result.delta)
        if not result.snapped:
            self.diagram.connections.disconnect_handle(element, anchor.type)

        # Keep the grabbed anchor in sync with the reshaped element
        self.selected_anchor = next(
            (a for a in element.get_anchors() if a.type == anchor.type),
            anchor,
        )
        return commands + self._repaint_moved(before, [element])

    def drag_selected_element(self, delta: Point) -> List[RepaintCommand]:
        element = self.selected_element
        if element is None:
            return []

        results, commands = self.snap_detector.snap_handles(
            element, (GripType.START, GripType.END), delta
        )
        snapped = [g for g, r in results.items() if r.snapped]
        if snapped:
            delta = results[snapped[0]].delta

        connections = self.diagram.connections.connections_from(element)
        moved = [element] + [c.to_element for c in connections]
        before = covered_region(moved)
        for connection in connections:
            connection.to_element.move_anchor(
                connection.to_connection_point.type, delta
            )
        element.move(delta)
        self.selection_updated.send(self, element=element)

        if not snapped:
            self.detach_from_all_shapes(element)
        elif not delta.is_empty():
            # The other handle moved off whatever point it sat on
            for grip in (GripType.START, GripType.END):
                if grip not in snapped:
                    self.diagram.connections.disconnect_handle(element, grip)
        return commands + self._repaint_moved(before, moved)

    def detach_from_all_shapes(self, element: GraphicElement):
        graph = self.diagram.connections
        graph.disconnect_handle(element, GripType.START)
        graph.disconnect_handle(element, GripType.END)

    def move_all_elements(self, delta: Point) -> List[RepaintCommand]:
        """Pans the diagram by moving every element."""
        elements = list(self.diagram)
        before = covered_region(elements)
        self.diagram.move_all(delta)
        return self._repaint_moved(before, elements)

    def _repaint_moved(
        self, before: Optional[Rect], elements: Iterable[GraphicElement]
    ) -> List[RepaintCommand]:
        after = covered_region(elements)
        if before is None or after is None:
            return repaint_region(self.diagram, before or after)
        return repaint_region(self.diagram, before.union(after))

    def _on_element_removed(self, sender, element: GraphicElement):
        if self.showing_anchors_element is element:
            element.show_anchors = False
            self.showing_anchors_element = None
        self.snap_detector.forget(element)
        commands = repaint_region(self.diagram, element.update_rectangle())
        if self.selection.forget(element):
            logger.debug(f"Selected element {element} was removed")
            commands += self._end_gesture()
            self.selection_changed.send(self, element=None)
        self._emit(commands)

    def select_element(self, element: GraphicElement) -> List[RepaintCommand]:
        return self._emit(self.selection.select(element))

    def deselect_current(self) -> List[RepaintCommand]:
        return self._emit(self.selection.deselect_current())
