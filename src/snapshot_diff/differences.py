"""Difference records produced by the differ.

- ``AttributeDifference``: one attribute whose value changed.
- ``ChildDifference``: a whole subtree that exists on one side only, either
  an ``InsertedDifference`` (actual only) or a ``DeletedDifference``
  (expected only), recorded with the parent path it hangs off.
- ``ElementDifference``: the changes found below one matched element pair,
  nested along the matched children that carry changes.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, ClassVar

from snapshot_diff.attributes import Attribute, attribute_for
from snapshot_diff.attributes.base import value_hash

if TYPE_CHECKING:
    from snapshot_diff.descriptors import IdentifyingAttributes
    from snapshot_diff.tree.element import Element

__all__ = [
    "AttributeDifference",
    "ChangeKind",
    "ChildDifference",
    "DeletedDifference",
    "Difference",
    "ElementDifference",
    "InsertedDifference",
]


@dataclass(frozen=True, slots=True)
class AttributeDifference:
    """A changed attribute: ``key`` went from ``expected`` to ``actual``."""

    key: str
    expected: Any
    actual: Any

    def apply_change_to(self, attribute: Attribute | None) -> Attribute:
        """Return ``attribute`` with its value replaced by ``actual``."""
        if attribute is None:
            return attribute_for(self.key, self.actual)
        return attribute.apply_change(self.actual)

    def __hash__(self) -> int:
        # Values may be unhashable (state attributes are free-form).
        return hash((self.key, value_hash(self.expected), value_hash(self.actual)))


class ChangeKind(StrEnum):
    INSERTED = auto()
    DELETED = auto()


@dataclass(frozen=True, slots=True)
class ChildDifference:
    """A subtree present on one side only.

    Attributes:
        element:     Root of the affected subtree.
        parent_path: Path of the parent it hangs off; empty for a root.
    """

    element: Element
    parent_path: str

    kind: ClassVar[ChangeKind]

    @property
    def size(self) -> int:
        return self.element.size()

    @property
    def identifying_attributes(self) -> IdentifyingAttributes:
        return self.element.identifying_attributes


@dataclass(frozen=True, slots=True)
class InsertedDifference(ChildDifference):
    """A subtree found only in the actual tree."""

    kind: ClassVar[ChangeKind] = ChangeKind.INSERTED


@dataclass(frozen=True, slots=True)
class DeletedDifference(ChildDifference):
    """A subtree found only in the expected tree."""

    kind: ClassVar[ChangeKind] = ChangeKind.DELETED


@dataclass(frozen=True, slots=True)
class ElementDifference:
    """Changes below one matched ``(expected, actual)`` element pair.

    Attributes:
        expected:              The element in the expected tree.
        actual:                Its counterpart in the actual tree.
        attribute_differences: Changed attributes of this element, by key.
        child_differences:     Inserted/deleted children, in document order.
        children:              Differences of matched children that carry
                               changes, in document order.
    """

    expected: Element
    actual: Element
    attribute_differences: tuple[AttributeDifference, ...] = ()
    child_differences: tuple[ChildDifference, ...] = ()
    children: tuple[ElementDifference, ...] = ()

    @property
    def identifying_attributes(self) -> IdentifyingAttributes:
        return self.expected.identifying_attributes

    @property
    def has_own_changes(self) -> bool:
        return bool(self.attribute_differences or self.child_differences)

    def is_empty(self) -> bool:
        return not any(d.has_own_changes for d in self.walk())

    def walk(self) -> Iterator[ElementDifference]:
        """This difference and all nested ones, document order."""
        stack: list[ElementDifference] = [self]
        while stack:
            difference = stack.pop()
            yield difference
            stack.extend(reversed(difference.children))

    def iter_attribute_differences(self) -> Iterator[AttributeDifference]:
        """All attribute differences in the subtree, document order."""
        for difference in self.walk():
            yield from difference.attribute_differences

    def iter_child_differences(self) -> Iterator[ChildDifference]:
        """All inserted/deleted subtrees in the subtree, document order."""
        for difference in self.walk():
            yield from difference.child_differences


Difference = ElementDifference | ChildDifference
