"""Nesting module for packing rectangles into a growable region.

Provides a guillotine packer and an engine that sorts, rotates and expands.
"""

from autonest.nesting.engine import (
    NestingEngine,
    calculate_bounds,
    create_engine,
    nest_items,
)
from autonest.nesting.errors import (
    ConfigurationError,
    InvalidItemError,
    NestingError,
)
from autonest.nesting.free_space import ContainedRectPruning, FreeSpaceIndex
from autonest.nesting.guillotine import GuillotinePacker
from autonest.nesting.layout import (
    LayoutBounds,
    calculate_efficiency,
    calculate_final_bounds,
    export_layout,
    to_host_frame,
)
from autonest.nesting.models import (
    FreeRect,
    InvalidItem,
    Item,
    NestingConfig,
    NestingResult,
    Placement,
)
from autonest.nesting.validation import validate_items

__all__ = [
    "NestingEngine",
    "calculate_bounds",
    "create_engine",
    "nest_items",
    "ConfigurationError",
    "InvalidItemError",
    "NestingError",
    "ContainedRectPruning",
    "FreeSpaceIndex",
    "GuillotinePacker",
    "LayoutBounds",
    "calculate_efficiency",
    "calculate_final_bounds",
    "export_layout",
    "to_host_frame",
    "FreeRect",
    "InvalidItem",
    "Item",
    "NestingConfig",
    "NestingResult",
    "Placement",
    "validate_items",
]
