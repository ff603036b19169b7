"""Differ: turns a tree matching into typed differences and counters.

For every matched ``(expected, actual)`` pair the differ compares the union
of identifying and state attribute keys and records an
``AttributeDifference`` for each key whose values differ and which the ignore
policy does not ignore.  Unmatched children become ``DeletedDifference`` /
``InsertedDifference`` records carrying the whole subtree.

Counters:

- ``differences``: one per attribute difference and per inserted/deleted
  subtree.
- ``deleted`` / ``created``: the size of every deleted / inserted subtree.
- ``maintained``: one per matched element that emitted neither attribute nor
  child differences.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from snapshot_diff.algorithm.tree_matcher import ElementMatcher
from snapshot_diff.differences import (
    AttributeDifference,
    ChildDifference,
    DeletedDifference,
    Difference,
    ElementDifference,
    InsertedDifference,
)
from snapshot_diff.ignore import get_default_registry
from snapshot_diff.tree.element import assert_acyclic

if TYPE_CHECKING:
    from snapshot_diff.protocols import IgnorePolicy
    from snapshot_diff.tree.element import Element

__all__ = ["DiffCounters", "DiffOutcome", "Differ"]

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class DiffCounters:
    """The four counters of a comparison."""

    differences: int = 0
    deleted: int = 0
    created: int = 0
    maintained: int = 0

    def __add__(self, other: DiffCounters) -> DiffCounters:
        if not isinstance(other, DiffCounters):
            return NotImplemented
        return DiffCounters(
            differences=self.differences + other.differences,
            deleted=self.deleted + other.deleted,
            created=self.created + other.created,
            maintained=self.maintained + other.maintained,
        )


@dataclass(frozen=True, slots=True)
class DiffOutcome:
    """Everything the differ found for one pair of trees.

    Attributes:
        differences:   Top-level differences: the root ``ElementDifference``
                       when the roots matched, otherwise a deleted and an
                       inserted root.
        counters:      Counters over the whole comparison.
        matched_pairs: All matched element pairs, in document order.
    """

    differences: tuple[Difference, ...]
    counters: DiffCounters
    matched_pairs: tuple[tuple[Element, Element], ...]


@dataclass(slots=True)
class _PairFrame:
    expected: Element
    actual: Element
    attribute_differences: tuple[AttributeDifference, ...]
    child_differences: tuple[ChildDifference, ...]
    counters: DiffCounters
    parent: int
    children: list[ElementDifference] = field(default_factory=list)


class Differ:
    """Compares two element trees.

    Args:
        matcher: Element matcher; a default ``ElementMatcher`` when omitted.
        ignore:  Ignore policy; the process-wide registry when omitted.
    """

    def __init__(
        self,
        matcher: ElementMatcher | None = None,
        ignore: IgnorePolicy | None = None,
    ) -> None:
        self._ignore = ignore
        self._matcher = matcher if matcher is not None else ElementMatcher(ignore=ignore)

    @property
    def ignore(self) -> IgnorePolicy:
        return self._ignore if self._ignore is not None else get_default_registry()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def diff(self, expected: Element, actual: Element) -> DiffOutcome:
        """Match and diff two trees, starting with the roots as one sibling group."""
        if __debug__:
            assert_acyclic(expected)
            assert_acyclic(actual)

        root_match = self._matcher.match_siblings((expected,), (actual,))
        pairs: list[tuple[Element, Element]] = []

        if root_match.pairs:
            difference, counters = self._diff_tree(expected, actual, pairs)
            logger.debug("Diffed %d matched pair(s): %s", len(pairs), counters)
            return DiffOutcome((difference,), counters, tuple(pairs))

        logger.debug("Roots %s and %s did not match", expected, actual)

        differences: list[Difference] = []
        counters = DiffCounters()
        for child_difference in (
            DeletedDifference(expected, ""),
            InsertedDifference(actual, ""),
        ):
            if self._is_ignored(child_difference.element):
                continue
            differences.append(child_difference)
            counters = counters + _structural_counters(child_difference)
        return DiffOutcome(tuple(differences), counters, ())

    def attribute_differences(
        self, expected: Element, actual: Element
    ) -> tuple[AttributeDifference, ...]:
        """Changed, non-ignored attributes of one matched pair, sorted by key."""
        if self._is_ignored(expected) or self._is_ignored(actual):
            return ()

        keys = (
            set(expected.identifying_attributes.keys())
            | set(actual.identifying_attributes.keys())
            | set(expected.attributes)
            | set(actual.attributes)
        )
        result: list[AttributeDifference] = []
        for key in sorted(keys):
            expected_value = _value(expected, key)
            actual_value = _value(actual, key)
            if expected_value == actual_value:
                continue
            difference = AttributeDifference(
                key,
                None if expected_value is _MISSING else expected_value,
                None if actual_value is _MISSING else actual_value,
            )
            if self._is_ignored_difference(expected, difference):
                continue
            result.append(difference)
        return tuple(result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _diff_tree(
        self,
        expected: Element,
        actual: Element,
        pairs: list[tuple[Element, Element]],
    ) -> tuple[ElementDifference, DiffCounters]:
        # Pairs are visited in document order; differences are assembled
        # bottom-up afterwards so deep trees need no recursion.
        frames: list[_PairFrame] = []
        stack: list[tuple[Element, Element, int]] = [(expected, actual, -1)]
        while stack:
            left, right, parent = stack.pop()
            pairs.append((left, right))
            attribute_differences = self.attribute_differences(left, right)
            siblings = self._matcher.match_siblings(left.children, right.children)
            child_differences = self._child_differences(
                left, right, siblings.deleted, siblings.inserted
            )
            counters = DiffCounters(differences=len(attribute_differences))
            for child_difference in child_differences:
                counters = counters + _structural_counters(child_difference)
            if not attribute_differences and not child_differences:
                counters = counters + DiffCounters(maintained=1)

            index = len(frames)
            frames.append(
                _PairFrame(
                    left, right, attribute_differences, child_differences, counters, parent
                )
            )
            for i, j in reversed(siblings.pairs):
                stack.append((left.children[i], right.children[j], index))

        for index in reversed(range(len(frames))):
            frame = frames[index]
            difference = ElementDifference(
                expected=frame.expected,
                actual=frame.actual,
                attribute_differences=frame.attribute_differences,
                child_differences=frame.child_differences,
                children=tuple(reversed(frame.children)),
            )
            if frame.parent < 0:
                continue
            owner = frames[frame.parent]
            owner.counters = owner.counters + frame.counters
            if frame.attribute_differences or frame.child_differences or frame.children:
                owner.children.append(difference)

        # the root frame is assembled last
        return difference, frames[0].counters

    def _child_differences(
        self,
        expected: Element,
        actual: Element,
        deleted: Sequence[int],
        inserted: Sequence[int],
    ) -> tuple[ChildDifference, ...]:
        # Deletions are positioned by expected index, insertions by actual index.
        positioned: list[tuple[int, int, ChildDifference]] = []
        for i in deleted:
            element = expected.children[i]
            if not self._is_ignored(element):
                positioned.append((i, 0, DeletedDifference(element, expected.path)))
        for j in inserted:
            element = actual.children[j]
            if not self._is_ignored(element):
                positioned.append((j, 1, InsertedDifference(element, actual.path)))
        positioned.sort(key=lambda item: (item[0], item[1]))
        return tuple(difference for _, _, difference in positioned)

    def _is_ignored(self, element: Element) -> bool:
        should_ignore_element = getattr(self.ignore, "should_ignore_element", None)
        if should_ignore_element is None:
            return False
        return bool(should_ignore_element(element.identifying_attributes))

    def _is_ignored_difference(
        self, element: Element, difference: AttributeDifference
    ) -> bool:
        ignore = self.ignore
        check = getattr(ignore, "should_ignore_attribute_difference", None)
        if check is not None:
            return bool(check(element.identifying_attributes, difference))
        return ignore.should_ignore_attribute(difference.key)


def _value(element: Element, key: str) -> Any:
    if key in element.attributes:
        return element.attributes[key]
    if key in element.identifying_attributes:
        return element.identifying_attributes.get(key)
    return _MISSING


def _structural_counters(difference: ChildDifference) -> DiffCounters:
    size = difference.size
    if isinstance(difference, DeletedDifference):
        return DiffCounters(differences=1, deleted=size)
    return DiffCounters(differences=1, created=size)
