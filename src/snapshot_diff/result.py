"""ComparisonResult dataclass for state comparison output.

This module provides the rich result type returned by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snapshot_diff.differences import Difference

__all__ = ["ComparisonResult"]


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Rich result of a compare() call.

    Attributes:
        root_score: Identification score of the two roots in [0.0, 1.0].
        differences: Top-level differences: the root ``ElementDifference`` when
            the roots matched, otherwise a deleted and an inserted root.
        matched_pairs: ``(expected_path, actual_path)`` pairs of all matched
            elements, in document order.
        deleted_paths: Paths of the roots of deleted subtrees.
        inserted_paths: Paths of the roots of inserted subtrees.
        differences_count: Attribute plus structural differences.
        deleted_count: Elements only present in the expected tree.
        created_count: Elements only present in the actual tree.
        maintained_count: Matched elements without any difference.
        computation_time_ms: Wall-clock duration of the comparison in milliseconds.
    """

    root_score: float
    differences: tuple[Difference, ...]
    matched_pairs: list[tuple[str, str]]
    deleted_paths: list[str]
    inserted_paths: list[str]
    differences_count: int
    deleted_count: int
    created_count: int
    maintained_count: int
    computation_time_ms: float

    def is_empty(self) -> bool:
        return self.differences_count == 0 and self.deleted_count == 0 and self.created_count == 0
