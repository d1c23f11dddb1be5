"""Guillotine bin packing for a single fixed-size region.

Efficient for rectangular items. Each successful insert cuts the chosen free
rectangle into a right column and a bottom row.
"""

from typing import Hashable, List, Optional

from autonest.nesting.free_space import ContainedRectPruning, FreeSpaceIndex
from autonest.nesting.models import FreeRect, Placement
from autonest.utils import get_logger

logger = get_logger("nesting.guillotine")


class GuillotinePacker:
    """
    Packer owning the free space of one region.

    Items are reserved with ``spacing`` added to their width and height, so
    neighbours keep a gap of at least ``spacing``. Placements report the
    item's own size.
    """

    def __init__(
        self,
        width: float,
        height: float,
        spacing: float = 0.0,
        free_space: Optional[FreeSpaceIndex] = None,
    ):
        """
        Initialize the packer.

        Args:
            width: Region width
            height: Region height
            spacing: Gap added to each item's footprint
            free_space: Free rectangle index (defaults to containment pruning)
        """
        self.bin_width = width
        self.bin_height = height
        self.spacing = spacing
        if free_space is None:
            free_space = ContainedRectPruning(width, height)
        self.free_space = free_space
        self._placements: List[Placement] = []

    @property
    def free_rectangles(self) -> List[FreeRect]:
        return self.free_space.rects

    @property
    def placements(self) -> List[Placement]:
        """Placements made so far, in insertion order."""
        return list(self._placements)

    @property
    def occupied_area(self) -> float:
        return sum(p.area for p in self._placements)

    @property
    def free_area(self) -> float:
        return self.free_space.total_area

    def can_fit(self, width: float, height: float) -> bool:
        """Check whether an item would fit without inserting it."""
        return self.free_space.find_best(width + self.spacing, height + self.spacing) is not None

    def insert(self, width: float, height: float, id: Hashable) -> Optional[Placement]:
        """
        Place an item using Best Short Side Fit.

        Args:
            width: Item width as it should be placed
            height: Item height as it should be placed
            id: Identifier copied onto the placement

        Returns:
            The placement, or None when no free rectangle can hold the item
        """
        footprint_w = width + self.spacing
        footprint_h = height + self.spacing

        found = self.free_space.find_best(footprint_w, footprint_h)
        if found is None:
            return None

        index, rect = found
        placement = Placement(
            id=id,
            x=rect.x,
            y=rect.y,
            width=width,
            height=height,
        )

        self.free_space.split(index, footprint_w, footprint_h)
        self._placements.append(placement)

        logger.debug(
            f"Placed {id!r} at ({rect.x}, {rect.y}), "
            f"{len(self.free_space)} free rects left"
        )
        return placement
