"""
Diagram model: geometry types, elements and the connection graph.
"""

from .connection import Connection, ConnectionGraph
from .diagram import Diagram
from .element import (
    Connectable,
    GraphicElement,
    Highlightable,
    Selectable,
)
from .geometry import ConnectionPoint, GripType, Point, Rect, ShapeAnchor
from .shapes import Box, Connector


__all__ = [
    "Box",
    "Connectable",
    "Connection",
    "ConnectionGraph",
    "ConnectionPoint",
    "Connector",
    "Diagram",
    "GraphicElement",
    "GripType",
    "Highlightable",
    "Point",
    "Rect",
    "Selectable",
    "ShapeAnchor",
]
