"""
Interaction core of a diagram editor: selection, dragging and snapping of
connector endpoints to nearby shapes.
"""

from .config import ConfigManager, SnapConfig
from .core.diagram import Diagram
from .core.geometry import GripType, Point, Rect
from .core.shapes import Box, Connector
from .canvas.controller import CanvasController
from .canvas.pointer import MouseButton, PointerEvent, PointerState


__all__ = [
    "Box",
    "CanvasController",
    "ConfigManager",
    "Connector",
    "Diagram",
    "GripType",
    "MouseButton",
    "Point",
    "PointerEvent",
    "PointerState",
    "Rect",
    "SnapConfig",
]
