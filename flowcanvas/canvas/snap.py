from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from ..config import SnapConfig
from ..core.diagram import Diagram
from ..core.element import GraphicElement
from ..core.geometry import ConnectionPoint, GripType, Point
from .repaint import Redraw, RepaintCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapInfo:
    near_element: GraphicElement
    line_connection_point: ConnectionPoint


@dataclass(frozen=True)
class SnapResult:
    snapped: bool
    delta: Point


def _moving_toward(offset: Point, delta: Point) -> bool:
    """
    True if, on both axes, the offset or the delta is zero or both point
    the same way.
    """
    for off, d in zip(offset.signs(), delta.signs()):
        if off != 0 and d != 0 and off != d:
            return False
    return True


class SnapDetector:
    """
    Finds shapes near the handles of a dragged element, keeps their
    connection points highlighted, and decides whether a handle attaches
    to or detaches from a shape.

    A shape is near a handle when the handle, either where it is now or
    translated by the requested delta, lies within the shape's grown
    rectangle. A handle sitting on one of the shape's connection points
    keeps that point as its candidate. Otherwise the candidate is looked
    up around the destination. Direction and the final snap offset are
    measured from where the handle is now.

    A handle attaches only while it moves toward a connection point, and
    an attached handle only lets go when a single sample moves it by at
    least `detach_velocity` on some axis. This keeps a handle from
    jittering on and off at the edge of the snap range.
    """

    def __init__(self, diagram: Diagram, config: SnapConfig):
        self.diagram = diagram
        self.config = config
        self.currently_near: List[SnapInfo] = []

    def nearby_elements(
        self,
        dragged: GraphicElement,
        points: Sequence[ConnectionPoint],
        delta: Point,
    ) -> List[SnapInfo]:
        near = []
        snap_range = self.config.element_snap_range
        viewport = self.diagram.viewport
        for element in self.diagram.elements:
            if (
                element is dragged
                or element.is_connector
                or not element.on_screen(viewport)
            ):
                continue
            check_range = element.display_rectangle.grow(snap_range)
            for cp in points:
                if check_range.contains(cp.point) or check_range.contains(
                    cp.point + delta
                ):
                    near.append(SnapInfo(element, cp))
        return near

    def update_highlights(
        self, near: List[SnapInfo]
    ) -> List[RepaintCommand]:
        """
        Shows connection points on the elements in `near`, hides them on
        elements that dropped out since the last sample, and remembers
        `near` as the current set.
        """
        new_elements = _unique(si.near_element for si in near)
        gone = [
            e
            for e in _unique(si.near_element for si in self.currently_near)
            if e not in new_elements
        ]
        commands = self._show_connection_points(new_elements, True)
        commands += self._show_connection_points(gone, False)
        self.currently_near = list(near)
        return commands

    def clear(self) -> List[RepaintCommand]:
        return self.update_highlights([])

    def forget(self, element: GraphicElement):
        """Drops `element` from the nearby set."""
        element.show_connection_points = False
        self.currently_near = [
            si for si in self.currently_near if si.near_element is not element
        ]

    def _show_connection_points(
        self, elements: List[GraphicElement], state: bool
    ) -> List[RepaintCommand]:
        size = self.config.connection_point_marker_size
        commands: List[RepaintCommand] = []
        for element in elements:
            if element.show_connection_points == state:
                continue
            element.show_connection_points = state
            commands.append(Redraw(element, size, size))
        return commands

    def snap(
        self, dragged: GraphicElement, grip: GripType, delta: Point
    ) -> Tuple[SnapResult, List[RepaintCommand]]:
        results, commands = self.snap_handles(dragged, [grip], delta)
        return results[grip], commands

    def snap_handles(
        self,
        dragged: GraphicElement,
        grips: Sequence[GripType],
        delta: Point,
    ) -> Tuple[Dict[GripType, SnapResult], List[RepaintCommand]]:
        """
        Runs the snap check for each handle type in `grips` in order, all
        with the requested `delta`, and stops at the first handle that
        snaps. Only that handle is connected, since the dragged element can
        land on a single offset. Handles after it are not checked and have
        no entry in the result. The nearby sets of all handles are
        highlighted together.
        """
        cps = dragged.get_connection_points()
        near_by_grip = {
            grip: self.nearby_elements(
                dragged, [cp for cp in cps if grip.matches(cp.type)], delta
            )
            for grip in grips
        }
        all_near = [si for near in near_by_grip.values() for si in near]
        commands = self.update_highlights(all_near)
        results: Dict[GripType, SnapResult] = {}
        for grip, near in near_by_grip.items():
            results[grip] = self._attach_or_detach(dragged, near, delta)
            if results[grip].snapped:
                break
        return results, commands

    def _closest_point(
        self, element: GraphicElement, source: Point, target: Point
    ) -> Optional[ConnectionPoint]:
        points = element.get_connection_points()
        for cp in points:
            if cp.point == source:
                return cp
        snap_range = self.config.connection_point_snap_range
        candidates = [
            cp
            for cp in points
            if cp.point.is_near(target, snap_range)
        ]
        if not candidates:
            return None
        return min(
            candidates, key=lambda cp: cp.point.distance_squared(target)
        )

    def _attach_or_detach(
        self,
        dragged: GraphicElement,
        near: List[SnapInfo],
        delta: Point,
    ) -> SnapResult:
        graph = self.diagram.connections
        velocity = self.config.detach_velocity
        for si in near:
            source = si.line_connection_point
            target = source.point + delta
            candidate = self._closest_point(
                si.near_element, source.point, target
            )
            if candidate is None:
                continue

            offset = candidate.point - source.point
            if not _moving_toward(offset, delta):
                continue

            if offset.is_empty() and (
                abs(delta.x) >= velocity or abs(delta.y) >= velocity
            ):
                # Pulled away from the point it sits on.
                logger.debug(
                    f"Detaching {dragged} {source.type.name} "
                    f"from {si.near_element}"
                )
                graph.disconnect_handle(dragged, source.type)
                continue

            bound = graph.connected_shape(dragged, source.type)
            if not offset.is_empty() or bound is not si.near_element:
                graph.connect(si.near_element, candidate, dragged, source)
            return SnapResult(True, offset)

        return SnapResult(False, delta)


def _unique(elements) -> List[GraphicElement]:
    result: List[GraphicElement] = []
    for element in elements:
        if element not in result:
            result.append(element)
    return result
