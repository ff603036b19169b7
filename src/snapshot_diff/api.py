"""Public API functions for snapshot-diff.

This module provides the user-facing functions: compare, match_score,
is_equivalent, replay_test and replay_suite.  Each call creates a fresh
StateComparator, so no score cache outlives a call.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from snapshot_diff.algorithm import strategies
from snapshot_diff.comparator import StateComparator
from snapshot_diff.descriptors import IdentifyingAttributes
from snapshot_diff.report import SuiteReplayResult, TestReplayResult
from snapshot_diff.tree.builder import SnapshotBuilder
from snapshot_diff.tree.element import Element

if TYPE_CHECKING:
    from snapshot_diff.algorithm.config import DiffConfig
    from snapshot_diff.protocols import IgnorePolicy
    from snapshot_diff.result import ComparisonResult

__all__ = ["Check", "compare", "is_equivalent", "match_score", "replay_suite", "replay_test"]

Snapshot = Element | Mapping[str, Any]


class Check(NamedTuple):
    """One state comparison of a test: a named expected/actual snapshot pair."""

    name: str
    expected: Snapshot
    actual: Snapshot
    expected_metadata: Mapping[str, Any] | None = None
    actual_metadata: Mapping[str, Any] | None = None


def compare(
    expected: Snapshot,
    actual: Snapshot,
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> ComparisonResult:
    """Compare two element trees and return a rich ComparisonResult.

    Creates a fresh ``StateComparator`` per call.

    Args:
        expected: The expected tree (``Element`` or snapshot mapping).
        actual:   The actual tree.
        config:   Matching configuration. Defaults to ``DiffConfig()`` when None.
        ignore:   Ignore policy. Defaults to the process-wide registry.

    Returns:
        A ``ComparisonResult`` with differences, matched pairs, counters and
        computation_time_ms populated.
    """
    comparator = StateComparator(config=config, ignore=ignore)
    return comparator.compare(expected, actual)


def match_score(
    expected: Snapshot | IdentifyingAttributes,
    actual: Snapshot | IdentifyingAttributes,
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> float:
    """Return the identification score of two elements (roots only).

    Returns:
        A float in [0.0, 1.0]; exactly 0.0 or 1.0 under the binary strategies.
    """
    return strategies.score(_identifying(expected), _identifying(actual), config, ignore)


def is_equivalent(
    expected: Snapshot,
    actual: Snapshot,
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> bool:
    """Return True if the comparison finds no difference, deletion or insertion."""
    return compare(expected, actual, config=config, ignore=ignore).is_empty()


def replay_test(
    name: str,
    checks: Iterable[Check | tuple[Any, ...]],
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> TestReplayResult:
    """Run every check of one test and return the finalized test result.

    Args:
        name:   Test name.
        checks: ``Check`` records (or plain tuples in the same field order).
        config: Matching configuration.
        ignore: Ignore policy.

    Returns:
        A finalized ``TestReplayResult`` with one action result per check.
    """
    comparator = StateComparator(config=config, ignore=ignore)
    return _replay_test(comparator, name, checks)


def replay_suite(
    name: str,
    tests: Mapping[str, Iterable[Check | tuple[Any, ...]]],
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> SuiteReplayResult:
    """Run every test of one suite and return the finalized suite result.

    Tests are replayed in mapping order; a failing check propagates its error
    and aborts the suite.
    """
    comparator = StateComparator(config=config, ignore=ignore)
    suite = SuiteReplayResult(name)
    for test_name, checks in tests.items():
        suite.add_test(_replay_test(comparator, test_name, checks))
    suite.finalize()
    return suite


def _replay_test(
    comparator: StateComparator,
    name: str,
    checks: Iterable[Check | tuple[Any, ...]],
) -> TestReplayResult:
    test = TestReplayResult(name)
    for raw in checks:
        check = raw if isinstance(raw, Check) else Check(*raw)
        test.add_action(
            comparator.replay_action(
                check.name,
                check.expected,
                check.actual,
                check.expected_metadata,
                check.actual_metadata,
            )
        )
    test.finalize()
    return test


def _identifying(value: Snapshot | IdentifyingAttributes) -> IdentifyingAttributes:
    if isinstance(value, IdentifyingAttributes):
        return value
    if isinstance(value, Element):
        return value.identifying_attributes
    if isinstance(value, Mapping):
        return SnapshotBuilder().build({**value, "children": []}).identifying_attributes
    msg = f"Expected an Element, a snapshot mapping or IdentifyingAttributes, got {type(value)!r}"
    raise TypeError(msg)
