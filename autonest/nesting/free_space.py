"""Free-space bookkeeping for a single packing region.

The packer talks to a ``FreeSpaceIndex`` so that the pruning strategy can be
replaced (for example by a strict maximal-rectangles index) without touching
the packer or the engine.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from autonest.nesting.models import FreeRect


class FreeSpaceIndex(ABC):
    """Abstract collection of free rectangles."""

    @property
    @abstractmethod
    def rects(self) -> List[FreeRect]:
        """Current free rectangles in enumeration order."""

    @abstractmethod
    def find_best(self, width: float, height: float) -> Optional[Tuple[int, FreeRect]]:
        """Return the index and rect that best fits a footprint, or None."""

    @abstractmethod
    def split(self, index: int, width: float, height: float) -> None:
        """Allocate a footprint at the top-left of the rect at ``index``."""

    @abstractmethod
    def prune(self) -> None:
        """Drop redundant free rectangles."""

    def __len__(self) -> int:
        return len(self.rects)

    @property
    def total_area(self) -> float:
        """Sum of free rect areas. Over-counts where rects overlap."""
        return sum(r.area for r in self.rects)


class ContainedRectPruning(FreeSpaceIndex):
    """Guillotine free list that prunes rects contained in another rect.

    Overlapping rects are kept as they are; only full containment is removed.
    """

    def __init__(self, width: float, height: float):
        self._rects: List[FreeRect] = [FreeRect(0.0, 0.0, width, height)]

    @property
    def rects(self) -> List[FreeRect]:
        return list(self._rects)

    def find_best(self, width: float, height: float) -> Optional[Tuple[int, FreeRect]]:
        """Best Short Side Fit; the first candidate wins ties."""
        best: Optional[Tuple[int, FreeRect]] = None
        best_short_side = float("inf")

        for i, rect in enumerate(self._rects):
            if not rect.fits(width, height):
                continue
            leftover_horiz = rect.width - width
            leftover_vert = rect.height - height
            short_side_fit = min(leftover_horiz, leftover_vert)

            if short_side_fit < best_short_side:
                best = (i, rect)
                best_short_side = short_side_fit

        return best

    def split(self, index: int, width: float, height: float) -> None:
        """Guillotine split into a right column and a bottom row."""
        rect = self._rects.pop(index)

        right_width = rect.width - width
        bottom_height = rect.height - height

        if right_width > 0:
            self._rects.append(FreeRect(
                x=rect.x + width,
                y=rect.y,
                width=right_width,
                height=rect.height,
            ))

        if bottom_height > 0:
            self._rects.append(FreeRect(
                x=rect.x,
                y=rect.y + height,
                width=width,
                height=bottom_height,
            ))

        self.prune()

    def prune(self) -> None:
        # Identical rects contain each other; keep the first of them.
        kept = []
        for i, rect in enumerate(self._rects):
            redundant = False
            for j, other in enumerate(self._rects):
                if i == j or not other.contains(rect):
                    continue
                if other == rect and j > i:
                    continue
                redundant = True
                break
            if not redundant:
                kept.append(rect)
        self._rects = kept
