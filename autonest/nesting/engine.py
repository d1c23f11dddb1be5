"""Nesting engine: orders items, drives the packer and grows the region.

Items are packed largest-area first into a single region. If anything is
left over the region is enlarged and the whole pass is repeated from scratch.
"""

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from autonest.nesting.guillotine import GuillotinePacker
from autonest.nesting.models import Item, NestingConfig, NestingResult, Placement
from autonest.nesting.validation import ItemLike, coerce_item, validate_items
from autonest.utils import format_size, get_logger

logger = get_logger("nesting.engine")


def calculate_bounds(placements: Iterable[Placement]) -> Tuple[float, float]:
    """Return the (max_x, max_y) extent of the placements."""
    max_x = max_y = 0.0
    for p in placements:
        max_x = max(max_x, p.right)
        max_y = max(max_y, p.bottom)
    return max_x, max_y


class NestingEngine:
    """
    Greedy rectangle nester for a single growable region.

    Each attempt builds a fresh GuillotinePacker. Attempts stop when every
    item is placed, when nothing could be placed (unless
    ``expand_when_empty``), or when ``max_attempts`` / ``max_dimension`` is
    reached.
    """

    def __init__(self, config: Optional[NestingConfig] = None, **overrides):
        """
        Initialize the engine.

        Args:
            config: Nesting configuration
            **overrides: Individual NestingConfig fields to override

        Raises:
            ConfigurationError: If the resulting configuration is invalid
        """
        config = config or NestingConfig()
        if overrides:
            config = replace(config, **overrides)
        config.validate()
        self.config = config

    def nest(self, items: Optional[Sequence[ItemLike]]) -> List[Placement]:
        """
        Nest items and return their placements.

        Args:
            items: Items or ``{id, width, height, payload?}`` mappings

        Returns:
            Placements in placement order (largest area first). Items that
            could not be placed are left out; use ``run`` to get them.
        """
        return self.run(items).placements

    def run(self, items: Optional[Sequence[ItemLike]]) -> NestingResult:
        """
        Nest items and report placements, leftovers and the final region.

        Args:
            items: Items or ``{id, width, height, payload?}`` mappings

        Returns:
            Nesting result
        """
        config = self.config
        result = NestingResult(
            region_width=config.target_width,
            region_height=config.target_height,
        )

        if not items:
            return result

        if config.validate_items:
            valid, rejected = validate_items(items)
            if rejected:
                result.rejected = rejected
                message = f"Skipping {len(rejected)} invalid item(s)"
                logger.warning(f"{message}: {[r.id for r in rejected]}")
                result.warnings.append(message)
        else:
            valid = [coerce_item(item) for item in items]

        if not valid:
            return result

        ordered = sorted(valid, key=lambda item: item.area, reverse=True)

        width, height = config.target_width, config.target_height
        attempt = 0
        while True:
            attempt += 1
            logger.debug(f"Attempt {attempt}: packing {len(ordered)} items into {format_size(width, height)}")
            placements, unplaced = self._pack(ordered, width, height)

            if not unplaced:
                break

            if not placements and not config.expand_when_empty:
                logger.debug("Nothing fits the region; not expanding")
                break

            if attempt >= config.max_attempts:
                result.warnings.append(f"Stopped after {attempt} attempts (max_attempts)")
                break

            new_width, new_height = self._expanded_region(width, height, placements, unplaced)
            new_width = min(new_width, config.max_dimension)
            new_height = min(new_height, config.max_dimension)
            if new_width <= width and new_height <= height:
                result.warnings.append(
                    f"Region cannot grow beyond {format_size(width, height)} (max_dimension)"
                )
                break

            logger.debug(
                f"{len(unplaced)} item(s) left over, expanding region to "
                f"{format_size(new_width, new_height)}"
            )
            width, height = new_width, new_height

        result.placements = placements
        result.unplaced = [item.id for item in unplaced]
        result.region_width = width
        result.region_height = height
        result.attempts = attempt

        if unplaced:
            message = f"{len(unplaced)} item(s) could not be placed"
            logger.warning(f"{message}: {result.unplaced}")
            result.warnings.append(message)

        return result

    def _pack(
        self,
        items: Sequence[Item],
        width: float,
        height: float,
    ) -> Tuple[List[Placement], List[Item]]:
        """Run one packing pass over a fresh region."""
        packer = GuillotinePacker(width, height, self.config.spacing)
        placements = []
        unplaced = []

        for item in items:
            placement = packer.insert(item.width, item.height, item.id)

            if placement is None and self.config.allow_rotation and not item.is_square:
                placement = packer.insert(item.height, item.width, item.id)
                if placement is not None:
                    placement.rotated = True

            if placement is not None:
                placement.payload = item.payload
                placements.append(placement)
            else:
                unplaced.append(item)

        return placements, unplaced

    def _expanded_region(
        self,
        width: float,
        height: float,
        placements: List[Placement],
        unplaced: List[Item],
    ) -> Tuple[float, float]:
        """Work out the next, strictly larger, region size."""
        margin = self.config.expansion_margin

        if placements:
            max_x, max_y = calculate_bounds(placements)
            new_width = max(width, max_x + margin)
            new_height = max(height, max_y + margin)
        else:
            # Only reached with expand_when_empty: make room for the largest leftover
            spacing = self.config.spacing
            new_width = max(width, max(item.width for item in unplaced) + spacing)
            new_height = max(height, max(item.height for item in unplaced) + spacing)

        if new_width <= width and new_height <= height:
            new_width = width + margin
            new_height = height + margin

        return new_width, new_height

    calculate_bounds = staticmethod(calculate_bounds)


# Convenience functions
def create_engine(
    spacing: float = 10.0,
    allow_rotation: bool = False,
    target_width: float = 1000.0,
    target_height: float = 1000.0,
) -> NestingEngine:
    """Create a nesting engine with the given settings."""
    config = NestingConfig(
        spacing=spacing,
        allow_rotation=allow_rotation,
        target_width=target_width,
        target_height=target_height,
    )
    return NestingEngine(config=config)


def nest_items(
    items: Sequence[ItemLike],
    config: Optional[NestingConfig] = None,
    **overrides,
) -> NestingResult:
    """
    Nest items in one call.

    Args:
        items: Items or item mappings
        config: Nesting configuration (defaults to NestingConfig())
        **overrides: Individual config fields to override

    Returns:
        Nesting result
    """
    return NestingEngine(config=config, **overrides).run(items)
