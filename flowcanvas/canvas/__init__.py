from .controller import CanvasController
from .pointer import MouseButton, PointerEvent, PointerState
from .repaint import (
    DrawBottomToTop,
    EraseRegion,
    Redraw,
    Renderer,
    RepaintCommand,
    UpdateScreen,
)
from .selection import SelectionManager
from .snap import SnapDetector, SnapInfo, SnapResult


__all__ = [
    "CanvasController",
    "DrawBottomToTop",
    "EraseRegion",
    "MouseButton",
    "PointerEvent",
    "PointerState",
    "Redraw",
    "Renderer",
    "RepaintCommand",
    "SelectionManager",
    "SnapDetector",
    "SnapInfo",
    "SnapResult",
    "UpdateScreen",
]
