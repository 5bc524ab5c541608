"""
Repaint commands produced by the interaction core.

Controller operations never paint. They return a list of these commands,
which a renderer applies in order. Applying a command more than once must
be harmless.

Commands that cover a region may carry it explicitly. Moves capture the
region before the move, so that the renderer can also clear where the
elements used to be.
"""

from __future__ import annotations
from abc import abstractmethod
from dataclasses import dataclass
from typing import (
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    TYPE_CHECKING,
)
from ..core.geometry import Rect

if TYPE_CHECKING:
    from ..core.diagram import Diagram
    from ..core.element import GraphicElement


class RepaintCommand:
    """Base for all repaint commands."""

    pass


@dataclass(frozen=True)
class RegionCommand(RepaintCommand):
    elements: Tuple["GraphicElement", ...] = ()
    region: Optional[Rect] = None

    def get_region(self) -> Optional[Rect]:
        """The explicit region, or the area covered by the elements."""
        if self.region is not None:
            return self.region
        return Rect.union_all(e.update_rectangle() for e in self.elements)


@dataclass(frozen=True)
class EraseRegion(RegionCommand):
    """Clear the region back to the background."""


@dataclass(frozen=True)
class DrawBottomToTop(RegionCommand):
    """Paint `elements`, which are already in bottom-to-top order."""


@dataclass(frozen=True)
class UpdateScreen(RegionCommand):
    """Push the region to the screen."""


@dataclass(frozen=True)
class Redraw(RepaintCommand):
    """
    Repaint a single element. The extra width and height grow the
    repainted region, e.g. for markers drawn outside the element.
    """

    element: "GraphicElement"
    extra_width: int = 0
    extra_height: int = 0


def covered_region(elements: Iterable["GraphicElement"]) -> Optional[Rect]:
    return Rect.union_all(e.update_rectangle() for e in elements)


def repaint_region(
    diagram: "Diagram", region: Optional[Rect]
) -> List[RepaintCommand]:
    """
    The erase, draw, update-screen cycle over everything overlapping
    `region`.
    """
    if region is None:
        return []
    affected = tuple(diagram.intersecting(region))
    return [
        EraseRegion(affected, region),
        DrawBottomToTop(affected, region),
        UpdateScreen(affected, region),
    ]


class Renderer(Protocol):
    @abstractmethod
    def apply(self, commands: List[RepaintCommand]):
        raise NotImplementedError
