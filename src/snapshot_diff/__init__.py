"""Snapshot diff - recognition and comparison of UI state trees."""

from __future__ import annotations

from snapshot_diff.algorithm.config import AssignmentMode, DiffConfig, SimilarityStrategy
from snapshot_diff.api import (
    Check,
    compare,
    is_equivalent,
    match_score,
    replay_suite,
    replay_test,
)
from snapshot_diff.comparator import StateComparator
from snapshot_diff.descriptors import PERFECT_SIMILARITY, IdentifyingAttributes
from snapshot_diff.ignore import IgnoreRegistry, get_default_registry, set_default_registry
from snapshot_diff.result import ComparisonResult
from snapshot_diff.tree import Element, SnapshotBuilder

__version__: str = "0.1.0"
__all__: list[str] = [
    "PERFECT_SIMILARITY",
    "AssignmentMode",
    "Check",
    "ComparisonResult",
    "DiffConfig",
    "Element",
    "IdentifyingAttributes",
    "IgnoreRegistry",
    "SimilarityStrategy",
    "SnapshotBuilder",
    "StateComparator",
    "compare",
    "get_default_registry",
    "is_equivalent",
    "match_score",
    "replay_suite",
    "replay_test",
    "set_default_registry",
]
