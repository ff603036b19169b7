"""Attribute base class and the scalar attribute variants.

An attribute is an immutable, weighted, comparable ``(key, value)`` pair.
Every variant provides the same small capability set:

- ``match(other)``: similarity in [0, 1]; ``match(None)`` is 0.
- ``compare_to(other)``: -1, 0 or +1; a total order consistent with ``==``.
- ``apply_change(actual)``: a new attribute carrying ``actual`` as value.

The set of variants is closed: strings, numbers, enumerated tags, free-form
objects (this module) plus paths, suffixes and outlines (``path`` and
``outline`` modules).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from snapshot_diff.algorithm.strings import jaro_winkler_similarity

__all__ = [
    "COMPARE_EQUAL",
    "Attribute",
    "EnumAttribute",
    "NumericAttribute",
    "ObjectAttribute",
    "StringAttribute",
    "canonical_form",
    "value_hash",
]

COMPARE_EQUAL = 0

DEFAULT_WEIGHT = 1.0


def _sign(left: Any, right: Any) -> int:
    if left < right:
        return -1
    if left > right:
        return 1
    return COMPARE_EQUAL


def canonical_form(value: Any) -> str:
    """Text form of ``value`` that agrees for values comparing equal.

    Integral floats render like the matching int; mappings and sets render
    their entries sorted, so ``{"a": 1, "b": 2}`` and ``{"b": 2.0, "a": 1}``
    share one form.
    """
    if isinstance(value, float) and value.is_integer():
        return repr(int(value))
    if isinstance(value, int):
        return repr(int(value))
    if isinstance(value, Mapping):
        items = sorted(f"{canonical_form(k)}: {canonical_form(v)}" for k, v in value.items())
        return "{" + ", ".join(items) + "}"
    if isinstance(value, (set, frozenset)):
        return "set(" + ", ".join(sorted(canonical_form(v) for v in value)) + ")"
    if isinstance(value, list):
        return "[" + ", ".join(canonical_form(v) for v in value) + "]"
    if isinstance(value, tuple):
        return "(" + ", ".join(canonical_form(v) for v in value) + ")"
    return repr(value)


def value_hash(value: Any) -> int:
    """Hash of ``value`` consistent with ``==``, also for unhashable values."""
    if isinstance(value, (set, frozenset)):
        return hash(frozenset(value))
    try:
        return hash(value)
    except TypeError:
        return hash(canonical_form(value))


@dataclass(frozen=True, slots=True)
class Attribute:
    """Base of all attribute variants.

    Attributes:
        key:    Case-sensitive attribute name, e.g. ``"text"``.
        value:  The attribute value; its type depends on the variant.
        weight: Non-negative contribution to identification scores.
    """

    key: str
    value: Any
    weight: float = DEFAULT_WEIGHT

    def __post_init__(self) -> None:
        if self.weight < 0.0:
            msg = f"weight must be >= 0.0, got {self.weight} for {self.key!r}"
            raise ValueError(msg)

    def match(self, other: Attribute | None) -> float:
        """Return the similarity of this attribute's value to ``other``'s."""
        if other is None:
            return 0.0
        if self.value == other.value:
            return 1.0
        return self._match_value(other.value)

    def _match_value(self, other_value: Any) -> float:
        return 0.0

    def _order_value(self) -> Any:
        return canonical_form(self.value)

    def compare_to(self, other: Attribute | None) -> int:
        """Order by key, then variant, then value, then weight.

        ``None`` sorts before every attribute.
        """
        if other is None:
            return 1
        if self == other:
            return COMPARE_EQUAL
        mine = (self.key, type(self).__name__)
        theirs = (other.key, type(other).__name__)
        if mine != theirs:
            return _sign(mine, theirs)
        result = _sign(self._order_value(), other._order_value())
        if result != COMPARE_EQUAL:
            return result
        result = _sign(self.weight, other.weight)
        if result != COMPARE_EQUAL:
            return result
        return _sign(canonical_form(self.value), canonical_form(other.value))

    def __lt__(self, other: Attribute) -> bool:
        return self.compare_to(other) < 0

    def apply_change(self, actual: Any) -> Attribute:
        """Return a copy of this attribute whose value is ``actual``."""
        return replace(self, value=actual)


@dataclass(frozen=True, slots=True)
class StringAttribute(Attribute):
    """Free text; matched with Jaro–Winkler similarity."""

    value: str | None = None

    def _match_value(self, other_value: Any) -> float:
        if self.value is None or other_value is None:
            return 0.0
        return jaro_winkler_similarity(str(self.value), str(other_value))

    def _order_value(self) -> Any:
        return (self.value is not None, "" if self.value is None else str(self.value))


@dataclass(frozen=True, slots=True)
class NumericAttribute(Attribute):
    """Integer or floating-point value; matched by relative distance."""

    value: int | float = 0

    def _match_value(self, other_value: Any) -> float:
        if not isinstance(other_value, (int, float)) or isinstance(other_value, bool):
            return 0.0
        scale = max(abs(self.value), abs(other_value))
        if scale == 0:
            return 1.0
        distance = abs(self.value - other_value) / scale
        return min(1.0, max(0.0, 1.0 - distance))

    def _order_value(self) -> Any:
        return float(self.value)


@dataclass(frozen=True, slots=True)
class EnumAttribute(Attribute):
    """Enumerated tag (``Enum`` member, ``bool`` or a symbolic string)."""

    def _order_value(self) -> Any:
        if isinstance(self.value, Enum):
            return (type(self.value).__name__, str(self.value.value))
        return (type(self.value).__name__, str(self.value))


@dataclass(frozen=True, slots=True)
class ObjectAttribute(Attribute):
    """Any other value; matches only when equal."""

    def _order_value(self) -> Any:
        return canonical_form(self.value)

    def __hash__(self) -> int:
        # Free-form values may be unhashable (dicts, lists).
        return hash((self.key, value_hash(self.value), self.weight))
