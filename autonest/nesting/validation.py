"""Item validation before nesting."""

import math
import numbers
from typing import Any, Iterable, List, Tuple, Union

from autonest.nesting.errors import InvalidItemError
from autonest.nesting.models import InvalidItem, Item

ItemLike = Union[Item, dict]


def coerce_item(value: Any) -> Item:
    """Turn an Item or ``{id, width, height, payload?}`` mapping into an Item."""
    if isinstance(value, Item):
        return value
    if isinstance(value, dict):
        return Item.from_dict(value)
    raise InvalidItemError(f"Expected an Item or a mapping, got {type(value).__name__}")


def has_valid_dimensions(item: Item) -> bool:
    """Width and height must be real numbers, finite and positive."""
    return all(
        isinstance(v, numbers.Real) and not isinstance(v, bool)
        and math.isfinite(v) and v > 0
        for v in (item.width, item.height)
    )


def has_hashable_id(item: Item) -> bool:
    try:
        hash(item.id)
    except TypeError:
        return False
    return True


def validate_items(items: Iterable[ItemLike]) -> Tuple[List[Item], List[InvalidItem]]:
    """
    Split items into ones that can be nested and ones that cannot.

    Args:
        items: Items or item mappings

    Returns:
        Tuple of (valid items in input order, rejected items with reasons)
    """
    valid: List[Item] = []
    invalid: List[InvalidItem] = []
    seen = set()

    for raw in items:
        try:
            item = coerce_item(raw)
        except InvalidItemError as e:
            item_id = raw.get("id") if isinstance(raw, dict) else None
            invalid.append(InvalidItem(id=item_id, reason=str(e)))
            continue

        if not has_valid_dimensions(item):
            invalid.append(InvalidItem(id=item.id, reason="Invalid dimensions"))
        elif not has_hashable_id(item):
            invalid.append(InvalidItem(id=item.id, reason="Unhashable id"))
        elif item.id in seen:
            invalid.append(InvalidItem(id=item.id, reason="Duplicate id"))
        else:
            seen.add(item.id)
            valid.append(item)

    return valid, invalid
