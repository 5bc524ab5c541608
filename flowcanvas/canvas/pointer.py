from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
from ..core.geometry import Point, ShapeAnchor


class MouseButton(Enum):
    PRIMARY = 1
    MIDDLE = 2
    SECONDARY = 3


@dataclass(frozen=True)
class PointerEvent:
    location: Point
    button: MouseButton = MouseButton.PRIMARY

    @property
    def is_primary(self) -> bool:
        return self.button is MouseButton.PRIMARY


class PointerState(Enum):
    """What a pointer move means at the moment."""

    IDLE = auto()  # Hover highlighting only
    PAN = auto()  # Pointer down on empty canvas, moves everything
    DRAGGING_ELEMENT = auto()
    DRAGGING_ANCHOR = auto()

    @classmethod
    def of(
        cls,
        pointer_down: bool,
        dragging: bool,
        anchor: Optional[ShapeAnchor],
    ) -> PointerState:
        if dragging:
            if anchor is not None:
                return cls.DRAGGING_ANCHOR
            return cls.DRAGGING_ELEMENT
        if pointer_down:
            return cls.PAN
        return cls.IDLE
