"""Helpers for consuming placements on the host side.

Placements live in the packer frame: origin at the top-left, y growing
down. Hosts such as vector editors often grow y upwards, so the mapping here
can flip the vertical axis around a base point.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from autonest.nesting.models import NestingResult, Placement
from autonest.utils import format_dimension, format_size


@dataclass
class LayoutBounds:
    """Bounding box of a set of placements in host coordinates."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        return {
            "left": self.left,
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "width": self.width,
            "height": self.height,
        }


def to_host_frame(
    placement: Placement,
    base_x: float = 0.0,
    base_y: float = 0.0,
    invert_y: bool = True,
) -> Tuple[float, float]:
    """
    Map a placement's top-left corner into the host frame.

    Args:
        placement: Placement in the packer frame
        base_x: Host x of the region origin
        base_y: Host y of the region origin
        invert_y: True when host y grows upwards

    Returns:
        (left, top) in host coordinates
    """
    left = base_x + placement.x
    top = base_y - placement.y if invert_y else base_y + placement.y
    return left, top


def calculate_final_bounds(
    placements: Iterable[Placement],
    base_x: float = 0.0,
    base_y: float = 0.0,
    invert_y: bool = True,
) -> LayoutBounds:
    """Bounding box of all placements once mapped to the host frame."""
    placements = list(placements)
    if not placements:
        return LayoutBounds(left=base_x, top=base_y, right=base_x, bottom=base_y)

    lefts, rights, tops, bottoms = [], [], [], []
    for p in placements:
        left, top = to_host_frame(p, base_x, base_y, invert_y)
        lefts.append(left)
        rights.append(left + p.width)
        tops.append(top)
        bottoms.append(top - p.height if invert_y else top + p.height)

    if invert_y:
        return LayoutBounds(left=min(lefts), top=max(tops), right=max(rights), bottom=min(bottoms))
    return LayoutBounds(left=min(lefts), top=min(tops), right=max(rights), bottom=max(bottoms))


def calculate_efficiency(placements: Sequence[Placement]) -> int:
    """Percentage of the placements' bounding box covered by items, rounded."""
    bounds = calculate_final_bounds(placements)
    if bounds.area <= 0:
        return 0
    used = sum(p.area for p in placements)
    # Halves round up
    return math.floor(used / bounds.area * 100 + 0.5)


def export_layout(result: NestingResult) -> str:
    """Export a nesting result as a text description."""
    bounds = calculate_final_bounds(result.placements)
    lines: List[str] = [
        "; Nesting layout",
        f"; Region: {format_size(result.region_width, result.region_height)}",
        f"; Used: {format_size(bounds.width, bounds.height)}",
        f"; Efficiency: {calculate_efficiency(result.placements)}%",
        f"; Items placed: {len(result.placements)}",
        f"; Attempts: {result.attempts}",
        "",
    ]

    for i, p in enumerate(result.placements):
        lines.append(f"; Item {i + 1}: {p.id}")
        lines.append(f";   Position: ({format_dimension(p.x)}, {format_dimension(p.y)})")
        lines.append(f";   Size: {format_size(p.width, p.height)}")
        if p.rotated:
            lines.append(";   Rotated: 90°")
        lines.append("")

    if result.unplaced:
        lines.append(f"; Unplaced items ({len(result.unplaced)}):")
        for item_id in result.unplaced:
            lines.append(f";   - {item_id}")

    if result.rejected:
        lines.append(f"; Rejected items ({len(result.rejected)}):")
        for rejected in result.rejected:
            lines.append(f";   - {rejected.id}: {rejected.reason}")

    return "\n".join(lines)
