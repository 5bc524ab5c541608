from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING
from blinker import Signal
from .geometry import ConnectionPoint, GripType

if TYPE_CHECKING:
    from .element import GraphicElement


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    """
    A directed attachment edge, owned by the anchor element: "my
    `element_connection_point` holds `to_element`'s `to_connection_point`".
    """

    to_element: "GraphicElement"
    to_connection_point: ConnectionPoint
    element_connection_point: ConnectionPoint


class ConnectionGraph:
    """
    The authoritative store of connections between elements.

    Edges are kept as an outgoing adjacency list per anchor element. A
    reverse index maps each attached connector handle to the edge holding
    it, so a connector knows which shape each of its handles is bound to
    and a handle can be detached without scanning the whole graph. A
    handle is bound to at most one shape at a time.
    """

    def __init__(self):
        self._outgoing: Dict["GraphicElement", List[Connection]] = {}
        self._handles: Dict[
            "GraphicElement",
            Dict[GripType, Tuple["GraphicElement", Connection]],
        ] = {}

        self.connected = Signal()
        self.disconnected = Signal()

    def __len__(self) -> int:
        return sum(len(edges) for edges in self._outgoing.values())

    def __iter__(self) -> Iterator[Tuple["GraphicElement", Connection]]:
        for anchor, edges in self._outgoing.items():
            for connection in edges:
                yield anchor, connection

    def connections_from(self, anchor: "GraphicElement") -> List[Connection]:
        return list(self._outgoing.get(anchor, ()))

    def connected_shape(
        self, connector: "GraphicElement", grip: GripType
    ) -> Optional["GraphicElement"]:
        """Returns the shape the handle `grip` of `connector` is bound to."""
        binding = self._handles.get(connector, {}).get(grip)
        return binding[0] if binding else None

    def bound_grips(self, connector: "GraphicElement") -> List[GripType]:
        return list(self._handles.get(connector, {}))

    def connect(
        self,
        anchor: "GraphicElement",
        anchor_point: ConnectionPoint,
        connector: "GraphicElement",
        connector_point: ConnectionPoint,
    ) -> Connection:
        """
        Attaches the handle of `connector_point` to `anchor_point` on
        `anchor`. Any previous binding of that handle is replaced.
        """
        grip = connector_point.type
        binding = self._handles.get(connector, {}).get(grip)
        if binding is not None:
            old_anchor, old = binding
            if (
                old_anchor is anchor
                and old.element_connection_point == anchor_point
            ):
                return old
            self.disconnect_handle(connector, grip)

        connection = Connection(connector, connector_point, anchor_point)
        self._outgoing.setdefault(anchor, []).append(connection)
        self._handles.setdefault(connector, {})[grip] = anchor, connection
        logger.debug(f"Connected {connector} {grip.name} to {anchor}")
        self.connected.send(self, anchor=anchor, connection=connection)
        return connection

    def disconnect_handle(
        self, connector: "GraphicElement", grip: GripType
    ) -> List[Connection]:
        """
        Detaches the handle `grip` of `connector`, or every handle if
        `grip` is GripType.NONE. Returns the removed connections.
        """
        handles = self._handles.get(connector)
        if not handles:
            return []
        grips = [g for g in list(handles) if grip.matches(g)]
        removed = []
        for g in grips:
            anchor, connection = handles.pop(g)
            edges = self._outgoing.get(anchor, [])
            if connection in edges:
                edges.remove(connection)
            if not edges:
                self._outgoing.pop(anchor, None)
            removed.append(connection)
            logger.debug(f"Disconnected {connector} {g.name} from {anchor}")
            self.disconnected.send(self, anchor=anchor, connection=connection)
        if not handles:
            del self._handles[connector]
        return removed

    def remove_element(self, element: "GraphicElement") -> List[Connection]:
        """
        Drops every connection that touches `element`, as anchor or as
        connector, so no dangling edges remain once it leaves the diagram.
        """
        removed = self.disconnect_handle(element, GripType.NONE)
        for connection in self.connections_from(element):
            removed += self.disconnect_handle(
                connection.to_element, connection.to_connection_point.type
            )
        return removed

    def clear(self):
        for connector in list(self._handles):
            self.disconnect_handle(connector, GripType.NONE)
