"""Assignment of scored candidate pairs: greedy and optimal (Hungarian).

Both functions take ``Candidate`` records (expected index, actual index,
score and tie-break data) and return accepted ``(expected, actual)`` index
pairs sorted by expected index.  A pair is only ever accepted when its score
reaches the threshold, and every index is used at most once.

- ``greedy_assignment``: descending score; ties broken by higher equal-weight
  mass, then smaller path edit distance, then document order.
- ``optimal_assignment``: maximum total score via scipy's
  ``linear_sum_assignment``; sub-threshold and absent pairs are forbidden
  cells that never reach the solver as ``np.inf`` (which would raise
  ``ValueError``).  Guard value formula: ``finite_max * 2.0 + 1.0``.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["Candidate", "greedy_assignment", "hungarian_match", "optimal_assignment"]


@dataclass(frozen=True, slots=True)
class Candidate:
    """A scored ``(expected, actual)`` pair.

    Attributes:
        expected:      Index into the expected sibling list.
        actual:        Index into the actual sibling list.
        score:         Identification score in [0, 1].
        equal_weight:  Summed weight of attributes equal on both sides.
        path_distance: Edit distance between the two element paths.
    """

    expected: int
    actual: int
    score: float
    equal_weight: float = 0.0
    path_distance: int = 0

    def sort_key(self) -> tuple[float, float, int, int, int]:
        return (-self.score, -self.equal_weight, self.path_distance, self.expected, self.actual)


def greedy_assignment(
    candidates: Iterable[Candidate], threshold: float
) -> list[tuple[int, int]]:
    """Accept candidates in descending score order, each index at most once."""
    used_expected: set[int] = set()
    used_actual: set[int] = set()
    accepted: list[tuple[int, int]] = []

    for candidate in sorted(candidates, key=Candidate.sort_key):
        if candidate.score < threshold:
            # sorted by score: nothing further can pass
            break
        if candidate.expected in used_expected or candidate.actual in used_actual:
            continue
        used_expected.add(candidate.expected)
        used_actual.add(candidate.actual)
        accepted.append((candidate.expected, candidate.actual))

    return sorted(accepted)


def hungarian_match(
    cost_matrix: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Compute optimal bipartite assignment with np.inf guard.

    Args:
        cost_matrix: 2-D cost matrix of shape ``(m, n)``.  May contain
            ``np.inf`` to mark forbidden assignments.

    Returns:
        Tuple ``(row_ind, col_ind)`` of 1-D integer arrays giving the
        optimal assignment, with any pair whose *original* cost was
        infinite removed.  Empty arrays are returned when no valid
        assignment exists.
    """
    if cost_matrix.size == 0:
        return np.array([], dtype=int), np.array([], dtype=int)

    cost = np.asarray(cost_matrix, dtype=float)
    inf_mask = np.isinf(cost)

    if inf_mask.all():
        return np.array([], dtype=int), np.array([], dtype=int)

    if inf_mask.any():
        finite_max = float(cost[~inf_mask].max())
        guard_value = finite_max * 2.0 + 1.0
        cost = np.where(inf_mask, guard_value, cost)

    row_ind, col_ind = linear_sum_assignment(cost)

    if inf_mask.any():
        keep = ~inf_mask[row_ind, col_ind]
        row_ind = row_ind[keep]
        col_ind = col_ind[keep]

    return row_ind, col_ind


def optimal_assignment(
    candidates: Iterable[Candidate],
    n_expected: int,
    n_actual: int,
    threshold: float,
) -> list[tuple[int, int]]:
    """Maximum-total-score assignment over the accepted candidates."""
    cost = np.full((n_expected, n_actual), np.inf, dtype=float)
    for candidate in candidates:
        if candidate.score >= threshold:
            cost[candidate.expected, candidate.actual] = 1.0 - candidate.score

    row_ind, col_ind = hungarian_match(cost)
    return sorted(zip(row_ind.tolist(), col_ind.tolist(), strict=True))
