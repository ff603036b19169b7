"""attribute_for: pick the attribute variant for a raw Python value.

Dispatch order matters: the reserved keys (``path``, ``suffix``,
``outline``) are checked first, and ``bool`` is checked before numbers
because ``bool`` subclasses ``int`` in Python.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from snapshot_diff.attributes.base import (
    DEFAULT_WEIGHT,
    Attribute,
    EnumAttribute,
    NumericAttribute,
    ObjectAttribute,
    StringAttribute,
)
from snapshot_diff.attributes.outline import OUTLINE_ATTRIBUTE_KEY, OutlineAttribute, Rectangle
from snapshot_diff.attributes.path import (
    PATH_ATTRIBUTE_KEY,
    SUFFIX_ATTRIBUTE_KEY,
    PathAttribute,
    SuffixAttribute,
)

__all__ = ["attribute_for"]


def attribute_for(key: str, value: Any, weight: float = DEFAULT_WEIGHT) -> Attribute:
    """Wrap ``value`` in the attribute variant that fits its key and type.

    Args:
        key:    Attribute key.
        value:  Raw value.  An ``Attribute`` is returned unchanged.
        weight: Weight of the new attribute.

    Returns:
        A new attribute instance.
    """
    if isinstance(value, Attribute):
        return value
    if key == PATH_ATTRIBUTE_KEY:
        return PathAttribute(value, weight)
    if key == SUFFIX_ATTRIBUTE_KEY:
        return SuffixAttribute(value, weight)
    if key == OUTLINE_ATTRIBUTE_KEY or isinstance(value, Rectangle):
        return OutlineAttribute(value, weight, key)
    # CRITICAL: bool before int
    if isinstance(value, (bool, Enum)):
        return EnumAttribute(key, value, weight)
    if isinstance(value, (int, float)):
        return NumericAttribute(key, value, weight)
    if value is None or isinstance(value, str):
        return StringAttribute(key, value, weight)
    return ObjectAttribute(key, value, weight)
