"""Value objects shared by the packer and the nesting engine.

Items come in from the host collaborator, placements go back out. Both are
created per nest call and never persisted.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Optional

from autonest.nesting.errors import ConfigurationError, InvalidItemError


@dataclass(frozen=True)
class Item:
    """A rectangle to be nested."""
    id: Hashable
    width: float
    height: float
    payload: Any = field(default=None, compare=False)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    def to_dict(self) -> dict:
        """Convert to dictionary (payload is opaque and left out)."""
        return {
            "id": self.id,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Item":
        """Create from a ``{id, width, height, payload?}`` mapping."""
        missing = [key for key in ("id", "width", "height") if key not in data]
        if missing:
            raise InvalidItemError(f"Item is missing required keys: {', '.join(missing)}")

        try:
            width = float(data["width"])
            height = float(data["height"])
        except (TypeError, ValueError) as e:
            raise InvalidItemError(f"Item {data['id']!r} has non-numeric size: {e}") from e

        item_id = data["id"]
        if isinstance(item_id, list):
            item_id = tuple(item_id)

        return cls(
            id=item_id,
            width=width,
            height=height,
            payload=data.get("payload"),
        )


@dataclass
class Placement:
    """Where an item ended up.

    ``x``/``y`` is the top-left corner in the packer frame (y grows down).
    ``width``/``height`` are the as-placed item size without spacing, swapped
    when ``rotated``.
    """
    id: Hashable
    x: float
    y: float
    width: float
    height: float
    rotated: bool = False
    payload: Any = field(default=None, compare=False)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "rotated": self.rotated,
        }


@dataclass(frozen=True)
class FreeRect:
    """An unallocated rectangle inside a packing region."""
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def fits(self, width: float, height: float) -> bool:
        """Check whether a footprint of the given size fits inside."""
        return width <= self.width and height <= self.height

    def contains(self, other: "FreeRect") -> bool:
        """Check whether ``other`` lies wholly inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.x + other.width <= self.x + self.width
            and other.y + other.height <= self.y + self.height
        )


@dataclass(frozen=True)
class InvalidItem:
    """An item rejected before packing, with the reason."""
    id: Hashable
    reason: str

    def to_dict(self) -> dict:
        return {"id": self.id, "reason": self.reason}


@dataclass
class NestingConfig:
    """Configuration for the nesting engine."""
    # Spacing reserved to the right of and below every item
    spacing: float = 10.0

    # Options
    allow_rotation: bool = False  # Single 90 degree fallback
    validate_items: bool = True  # Drop invalid items instead of packing them

    # Initial region
    target_width: float = 1000.0
    target_height: float = 1000.0

    # Expansion policy
    expansion_margin: float = 100.0
    max_attempts: int = 64
    max_dimension: float = 1_000_000.0
    expand_when_empty: bool = False

    def validate(self) -> None:
        """Raise ConfigurationError if the configuration is unusable."""
        if not math.isfinite(self.spacing) or self.spacing < 0:
            raise ConfigurationError(f"Spacing must be a finite, non-negative number, got {self.spacing}")
        for name in ("target_width", "target_height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a finite, positive number, got {value}")
        if not math.isfinite(self.expansion_margin) or self.expansion_margin <= 0:
            raise ConfigurationError(
                f"Expansion margin must be a finite, positive number, got {self.expansion_margin}"
            )
        if self.max_attempts < 1:
            raise ConfigurationError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.max_dimension < max(self.target_width, self.target_height):
            raise ConfigurationError(
                f"max_dimension ({self.max_dimension}) is smaller than the target region "
                f"({self.target_width} x {self.target_height})"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "spacing": self.spacing,
            "allow_rotation": self.allow_rotation,
            "validate_items": self.validate_items,
            "target_width": self.target_width,
            "target_height": self.target_height,
            "expansion_margin": self.expansion_margin,
            "max_attempts": self.max_attempts,
            "max_dimension": self.max_dimension,
            "expand_when_empty": self.expand_when_empty,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NestingConfig":
        """Create from dictionary."""
        return cls(
            spacing=data.get("spacing", 10.0),
            allow_rotation=data.get("allow_rotation", False),
            validate_items=data.get("validate_items", True),
            target_width=data.get("target_width", 1000.0),
            target_height=data.get("target_height", 1000.0),
            expansion_margin=data.get("expansion_margin", 100.0),
            max_attempts=data.get("max_attempts", 64),
            max_dimension=data.get("max_dimension", 1_000_000.0),
            expand_when_empty=data.get("expand_when_empty", False),
        )

    @classmethod
    def from_settings(cls, settings=None) -> "NestingConfig":
        """Create from application settings (global settings by default)."""
        if settings is None:
            from autonest.config import get_settings
            settings = get_settings()

        return cls(
            spacing=settings.spacing,
            allow_rotation=settings.allow_rotation,
            target_width=settings.target_width,
            target_height=settings.target_height,
            expansion_margin=settings.expansion_margin,
            max_attempts=settings.max_attempts,
            max_dimension=settings.max_dimension,
            expand_when_empty=settings.expand_when_empty,
        )


@dataclass
class NestingResult:
    """Outcome of a nest run, including what could not be placed."""
    placements: List[Placement] = field(default_factory=list)
    unplaced: List[Hashable] = field(default_factory=list)
    rejected: List[InvalidItem] = field(default_factory=list)
    region_width: float = 0.0
    region_height: float = 0.0
    attempts: int = 0
    warnings: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every submitted item was placed."""
        return not self.unplaced and not self.rejected

    @property
    def placed_ids(self) -> List[Hashable]:
        return [p.id for p in self.placements]

    @property
    def utilization(self) -> float:
        """Percentage of the final region covered by placed items."""
        region_area = self.region_width * self.region_height
        if not self.placements or region_area <= 0:
            return 0.0
        used = sum(p.area for p in self.placements)
        return min(100.0, used / region_area * 100)

    def placement_for(self, item_id: Hashable) -> Optional[Placement]:
        """Look up the placement of an item by id."""
        for placement in self.placements:
            if placement.id == item_id:
                return placement
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "placements": [p.to_dict() for p in self.placements],
            "unplaced": list(self.unplaced),
            "rejected": [r.to_dict() for r in self.rejected],
            "region_width": self.region_width,
            "region_height": self.region_height,
            "attempts": self.attempts,
            "utilization": self.utilization,
            "warnings": list(self.warnings),
        }
