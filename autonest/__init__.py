"""AutoNest - rectangle nesting for layout tools."""

__version__ = "0.1.0"

from autonest.nesting import (
    GuillotinePacker,
    Item,
    NestingConfig,
    NestingEngine,
    NestingResult,
    Placement,
    nest_items,
)

__all__ = [
    "__version__",
    "GuillotinePacker",
    "Item",
    "NestingConfig",
    "NestingEngine",
    "NestingResult",
    "Placement",
    "nest_items",
]
