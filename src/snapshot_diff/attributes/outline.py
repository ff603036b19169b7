"""Rectangle and the ``outline`` attribute.

Outline similarity is one minus the normalized L1 distance between the two
rectangles' coordinates::

    1 - sum(|a_i - b_i|) / sum(max(|a_i|, |b_i|))     for i in x, y, w, h

clamped to [0, 1].  Two all-zero rectangles are identical.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple

from snapshot_diff.attributes.base import DEFAULT_WEIGHT, Attribute

__all__ = ["OUTLINE_ATTRIBUTE_KEY", "OutlineAttribute", "Rectangle"]

OUTLINE_ATTRIBUTE_KEY = "outline"


class Rectangle(NamedTuple):
    x: float
    y: float
    width: float
    height: float


def _as_rectangle(value: Any) -> Rectangle:
    if isinstance(value, Rectangle):
        return value
    if isinstance(value, dict):
        return Rectangle(value["x"], value["y"], value["width"], value["height"])
    x, y, width, height = value
    return Rectangle(x, y, width, height)


def rectangle_similarity(a: Rectangle, b: Rectangle) -> float:
    scale = sum(max(abs(p), abs(q)) for p, q in zip(a, b))
    if scale == 0:
        return 1.0
    distance = sum(abs(p - q) for p, q in zip(a, b)) / scale
    return min(1.0, max(0.0, 1.0 - distance))


@dataclass(frozen=True, slots=True, init=False)
class OutlineAttribute(Attribute):
    """The ``outline`` attribute: position and size of an element."""

    value: Rectangle

    def __init__(
        self,
        value: Rectangle | tuple[float, float, float, float],
        weight: float = DEFAULT_WEIGHT,
        key: str = OUTLINE_ATTRIBUTE_KEY,
    ) -> None:
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "value", _as_rectangle(value))
        object.__setattr__(self, "weight", weight)
        Attribute.__post_init__(self)

    def _match_value(self, other_value: Any) -> float:
        try:
            other = _as_rectangle(other_value)
        except (TypeError, ValueError, KeyError):
            return 0.0
        return rectangle_similarity(self.value, other)

    def _order_value(self) -> Any:
        return tuple(float(v) for v in self.value)

    def apply_change(self, actual: Any) -> OutlineAttribute:
        return OutlineAttribute(actual, self.weight, self.key)
