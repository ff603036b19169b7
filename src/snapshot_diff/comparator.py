"""StateComparator: orchestrator that wires SnapshotBuilder + ElementMatcher + Differ.

This is the central wiring layer between the matching/diffing algorithm and
the public API.  It turns two element trees into a rich ``ComparisonResult``
with the difference tree, matched pairs, counters and timing data, and rolls
comparisons up into replay results.

Architecture:
- compare() starts a wall-clock timer, builds ``Element`` trees from plain
  mappings when needed, scores the two roots, delegates matching and diffing
  to ``Differ`` and returns a ``ComparisonResult``.
- The root score is always computed, even when the roots are identical, so a
  degenerate pair (every identifying attribute ignored) surfaces as
  ``ZeroDivisionError`` instead of passing silently.
- Identification scores are cached via ``MatchCache`` (LRU), shared by every
  comparison made through the same comparator.
- Nothing is caught here: errors propagate to the caller and abort the
  enclosing check.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from snapshot_diff.algorithm.config import DiffConfig
from snapshot_diff.algorithm.differ import Differ
from snapshot_diff.algorithm.tree_matcher import ElementMatcher
from snapshot_diff.cache import MatchCache
from snapshot_diff.differences import DeletedDifference, InsertedDifference
from snapshot_diff.metadata import MetadataDifference, MetadataDifferenceFilter
from snapshot_diff.report import ActionReplayResult
from snapshot_diff.result import ComparisonResult
from snapshot_diff.tree.builder import SnapshotBuilder
from snapshot_diff.tree.element import Element

if TYPE_CHECKING:
    from snapshot_diff.protocols import IgnorePolicy

__all__ = ["StateComparator"]

logger = logging.getLogger(__name__)


class StateComparator:
    """Orchestrator for UI state comparison.

    Wires ``SnapshotBuilder``, ``ElementMatcher`` and ``Differ`` together
    into a single ``compare()`` call that returns a ``ComparisonResult``.

    Two separate ``StateComparator`` instances never share cache state; each
    instance maintains its own ``MatchCache``.

    Example::

        from snapshot_diff.comparator import StateComparator

        cmp = StateComparator()
        result = cmp.compare(
            {"type": "a.Label", "identifying": {"text": "hi"}},
            {"type": "a.Label", "identifying": {"text": "hello"}},
        )
        print(result.differences_count)   # 1
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        ignore: IgnorePolicy | None = None,
        max_cache_size: int = 4096,
        builder: SnapshotBuilder | None = None,
    ) -> None:
        """Initialise the comparator.

        Args:
            config: Matching configuration.  Defaults to ``DiffConfig()``.
            ignore: Ignore policy.  Defaults to the process-wide registry,
                looked up on every use.
            max_cache_size: Maximum number of pair scores held in the
                per-instance LRU cache.  This is an infrastructure parameter
                and not part of ``DiffConfig``.
            builder: Converts mapping snapshots to ``Element`` trees.
        """
        self._config: DiffConfig = config if config is not None else DiffConfig()
        self._ignore = ignore
        self._cache = MatchCache(self._config, ignore, max_size=max_cache_size)
        self._matcher = ElementMatcher(self._config, ignore, cache=self._cache)
        self._differ = Differ(self._matcher, ignore)
        self._metadata_filter = MetadataDifferenceFilter(ignore)
        self._builder = builder if builder is not None else SnapshotBuilder()

    @property
    def config(self) -> DiffConfig:
        return self._config

    @property
    def cache(self) -> MatchCache:
        return self._cache

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(
        self,
        expected: Element | Mapping[str, Any],
        actual: Element | Mapping[str, Any],
    ) -> ComparisonResult:
        """Compare two element trees and return a rich ComparisonResult.

        Args:
            expected: The expected tree, as ``Element`` or snapshot mapping.
            actual:   The actual tree, as ``Element`` or snapshot mapping.

        Returns:
            A ``ComparisonResult`` with all fields populated.

        Raises:
            ZeroDivisionError: If the roots have no non-ignored attribute under
                the weighted strategy.
        """
        t0 = time.perf_counter()

        expected_tree = self._as_element(expected)
        actual_tree = self._as_element(actual)

        root_score = self._cache.score(
            expected_tree.identifying_attributes, actual_tree.identifying_attributes
        )
        outcome = self._differ.diff(expected_tree, actual_tree)

        deleted_paths: list[str] = []
        inserted_paths: list[str] = []
        for difference in outcome.differences:
            if isinstance(difference, DeletedDifference):
                deleted_paths.append(difference.element.path)
            elif isinstance(difference, InsertedDifference):
                inserted_paths.append(difference.element.path)
            else:
                for child in difference.iter_child_differences():
                    if isinstance(child, DeletedDifference):
                        deleted_paths.append(child.element.path)
                    else:
                        inserted_paths.append(child.element.path)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        counters = outcome.counters
        logger.debug(
            "Compared %s with %s in %.2f ms: %d difference(s), %d deleted, "
            "%d created, %d maintained",
            expected_tree,
            actual_tree,
            elapsed_ms,
            counters.differences,
            counters.deleted,
            counters.created,
            counters.maintained,
        )

        return ComparisonResult(
            root_score=root_score,
            differences=outcome.differences,
            matched_pairs=[(e.path, a.path) for e, a in outcome.matched_pairs],
            deleted_paths=deleted_paths,
            inserted_paths=inserted_paths,
            differences_count=counters.differences,
            deleted_count=counters.deleted,
            created_count=counters.created,
            maintained_count=counters.maintained,
            computation_time_ms=elapsed_ms,
        )

    def replay_action(
        self,
        name: str,
        expected: Element | Mapping[str, Any],
        actual: Element | Mapping[str, Any],
        expected_metadata: Mapping[str, Any] | None = None,
        actual_metadata: Mapping[str, Any] | None = None,
    ) -> ActionReplayResult:
        """Compare one check and wrap it, with its filtered metadata difference."""
        result = self.compare(expected, actual)
        metadata = self._metadata_filter.filter(
            MetadataDifference.between(expected_metadata or {}, actual_metadata or {})
        )
        return ActionReplayResult.from_comparison(name, result, metadata)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _as_element(self, tree: Element | Mapping[str, Any]) -> Element:
        if isinstance(tree, Element):
            return tree
        if isinstance(tree, Mapping):
            return self._builder.build(tree)
        msg = f"Expected an Element or a snapshot mapping, got {type(tree)!r}"
        raise TypeError(msg)
