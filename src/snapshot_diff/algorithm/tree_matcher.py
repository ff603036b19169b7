"""ElementMatcher: pairs the elements of an expected and an actual tree.

Matching works on sibling groups, starting with the two roots as one-element
groups and recursing into every matched pair:

1. Exact-identity fast path: siblings whose identifiers (SHA-256 over
   ``parentPath # type # suffix``) coincide are paired in document order.
2. The remaining siblings with equal simple type are scored with the
   configured similarity strategy.
3. The scored candidates are assigned greedily (default) or optimally; a pair
   is only accepted at or above the "fairly similar" threshold.
4. Unmatched expected siblings are deletions, unmatched actual siblings are
   insertions.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snapshot_diff.algorithm.config import AssignmentMode, DiffConfig
from snapshot_diff.algorithm.matcher import Candidate, greedy_assignment, optimal_assignment
from snapshot_diff.algorithm.strategies import default_strategy
from snapshot_diff.algorithm.strings import levenshtein_distance
from snapshot_diff.cache import MatchCache
from snapshot_diff.tree.element import assert_acyclic

if TYPE_CHECKING:
    from snapshot_diff.descriptors import IdentifyingAttributes
    from snapshot_diff.protocols import IgnorePolicy
    from snapshot_diff.tree.element import Element

__all__ = ["ElementMatcher", "SiblingMatch", "TreeMatch"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SiblingMatch:
    """Result of matching two sibling lists, as indices into those lists.

    Attributes:
        pairs:    Matched ``(expected, actual)`` indices, by expected index.
        deleted:  Unmatched expected indices, ascending.
        inserted: Unmatched actual indices, ascending.
    """

    pairs: tuple[tuple[int, int], ...]
    deleted: tuple[int, ...]
    inserted: tuple[int, ...]


@dataclass(slots=True)
class TreeMatch:
    """Whole-tree matching result, level by level from the roots."""

    pairs: list[tuple[Element, Element]] = field(default_factory=list)
    deleted: list[Element] = field(default_factory=list)
    inserted: list[Element] = field(default_factory=list)


def _equal_weight(left: IdentifyingAttributes, right: IdentifyingAttributes) -> float:
    return sum(a.weight for a in left if right.get_attribute(a.key) == a)


class ElementMatcher:
    """Pairs elements of two trees by identification score.

    Args:
        config: Matching configuration.  Defaults to ``DiffConfig()``.
        ignore: Ignore policy forwarded to the similarity strategy.
        cache:  Score cache; a private one is created when omitted.
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        ignore: IgnorePolicy | None = None,
        cache: MatchCache | None = None,
    ) -> None:
        self._config = config if config is not None else DiffConfig()
        self._cache = cache if cache is not None else MatchCache(self._config, ignore)
        strategy = self._config.similarity_strategy or default_strategy()
        self._threshold = self._config.threshold_for(strategy)

    @property
    def threshold(self) -> float:
        return self._threshold

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def match(self, expected: Element, actual: Element) -> TreeMatch:
        """Match two whole trees.

        Matched pairs, deletions and insertions are reported breadth-first;
        a deleted or inserted subtree is reported by its root only.
        """
        if __debug__:
            assert_acyclic(expected)
            assert_acyclic(actual)

        result = TreeMatch()
        queue: deque[tuple[Sequence[Element], Sequence[Element]]] = deque(
            [((expected,), (actual,))]
        )
        while queue:
            expected_group, actual_group = queue.popleft()
            siblings = self.match_siblings(expected_group, actual_group)
            for i, j in siblings.pairs:
                e, a = expected_group[i], actual_group[j]
                result.pairs.append((e, a))
                queue.append((e.children, a.children))
            result.deleted.extend(expected_group[i] for i in siblings.deleted)
            result.inserted.extend(actual_group[j] for j in siblings.inserted)
        return result

    def match_siblings(
        self, expected: Sequence[Element], actual: Sequence[Element]
    ) -> SiblingMatch:
        """Match two sibling lists (children of an already matched pair)."""
        pairs = self._exact_pairs(expected, actual)
        remaining_expected = [i for i in range(len(expected)) if i not in pairs]
        matched_actual = set(pairs.values())
        remaining_actual = [j for j in range(len(actual)) if j not in matched_actual]

        if remaining_expected and remaining_actual:
            candidates = self._candidates(
                expected, actual, remaining_expected, remaining_actual
            )
            if self._config.assignment_mode == AssignmentMode.OPTIMAL:
                accepted = optimal_assignment(
                    candidates, len(expected), len(actual), self._threshold
                )
            else:
                accepted = greedy_assignment(candidates, self._threshold)
            pairs.update(accepted)

        matched_actual = set(pairs.values())
        return SiblingMatch(
            pairs=tuple(sorted(pairs.items())),
            deleted=tuple(i for i in range(len(expected)) if i not in pairs),
            inserted=tuple(j for j in range(len(actual)) if j not in matched_actual),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _exact_pairs(
        expected: Sequence[Element], actual: Sequence[Element]
    ) -> dict[int, int]:
        by_identifier: dict[str, deque[int]] = defaultdict(deque)
        for j, element in enumerate(actual):
            by_identifier[element.identifier].append(j)

        pairs: dict[int, int] = {}
        for i, element in enumerate(expected):
            waiting = by_identifier.get(element.identifier)
            if waiting:
                pairs[i] = waiting.popleft()
        return pairs

    def _candidates(
        self,
        expected: Sequence[Element],
        actual: Sequence[Element],
        expected_indices: list[int],
        actual_indices: list[int],
    ) -> list[Candidate]:
        candidates: list[Candidate] = []
        for i in expected_indices:
            left = expected[i].identifying_attributes
            for j in actual_indices:
                right = actual[j].identifying_attributes
                if left.simple_type != right.simple_type:
                    continue
                candidates.append(
                    Candidate(
                        expected=i,
                        actual=j,
                        score=self._cache.score(left, right),
                        equal_weight=_equal_weight(left, right),
                        path_distance=levenshtein_distance(left.path, right.path),
                    )
                )
        logger.debug(
            "Scored %d candidate pair(s) for %d expected / %d actual sibling(s)",
            len(candidates),
            len(expected_indices),
            len(actual_indices),
        )
        return candidates
