"""DiffConfig, SimilarityStrategy and AssignmentMode.

DiffConfig is a frozen (immutable) dataclass holding the matching
parameters.  SimilarityStrategy selects how two sets of identifying
attributes are scored against each other; AssignmentMode selects how scored
candidate pairs are turned into a one-to-one matching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto

__all__ = [
    "DEFAULT_STRONG_KEYS",
    "DEFAULT_WEAK_KEYS",
    "AssignmentMode",
    "DiffConfig",
    "SimilarityStrategy",
]

DEFAULT_STRONG_KEYS: frozenset[str] = frozenset({"id"})
DEFAULT_WEAK_KEYS: frozenset[str] = frozenset(
    {"path", "type", "x", "y", "height", "width"}
)

# Acceptance threshold of the graded weighted-average strategy.
_WEIGHTED_THRESHOLD = 0.9
# Binary strategies only ever return 0.0 or 1.0.
_BINARY_THRESHOLD = 1.0


class SimilarityStrategy(StrEnum):
    """How ``IdentifyingAttributes.match`` scores two elements.

    - STRICT:   "1", strong attribute sets must be equal and at least one weak
                key must be shared.  Binary.
    - SIMILAR:  "2", every strong attribute must be Jaro–Winkler similar
                (> 0.3) and at least one weak key must be shared.  Binary.
    - WEIGHTED: "3", weighted average of per-attribute matches.  Graded.
    """

    STRICT = "1"
    SIMILAR = "2"
    WEIGHTED = "3"

    @classmethod
    def from_selector(cls, selector: str | None) -> SimilarityStrategy:
        """Resolve a selector string; anything unrecognized means WEIGHTED."""
        try:
            return cls((selector or "").strip())
        except ValueError:
            return cls.WEIGHTED

    @property
    def is_binary(self) -> bool:
        return self is not SimilarityStrategy.WEIGHTED


class AssignmentMode(StrEnum):
    """How scored candidate pairs become a one-to-one matching.

    - GREEDY:  Descending score with deterministic tie-breaks.
    - OPTIMAL: Maximum total score via the Hungarian algorithm.
    """

    GREEDY = auto()
    OPTIMAL = auto()


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for matching and diffing.

    Attributes:
        similarity_strategy: Strategy used to score identifying attributes.
            ``None`` defers to the process-wide selector (environment).
        match_threshold: Minimum score for a candidate pair to be accepted,
            in [0, 1].  ``None`` means 0.9 for the weighted strategy and 1.0
            for the binary ones.
        assignment_mode: How candidate pairs are assigned.
        strong_keys: Attribute keys considered uniquely identifying.
        weak_keys: Structural/geometric keys that identify only in combination.
    """

    similarity_strategy: SimilarityStrategy | None = None
    match_threshold: float | None = None
    assignment_mode: AssignmentMode = AssignmentMode.GREEDY
    strong_keys: frozenset[str] = field(default=DEFAULT_STRONG_KEYS)
    weak_keys: frozenset[str] = field(default=DEFAULT_WEAK_KEYS)

    def __post_init__(self) -> None:
        if self.match_threshold is not None and not (
            0.0 <= self.match_threshold <= 1.0
        ):
            msg = f"match_threshold must be in [0, 1], got {self.match_threshold}"
            raise ValueError(msg)
        if not isinstance(self.strong_keys, frozenset):
            object.__setattr__(self, "strong_keys", frozenset(self.strong_keys))
        if not isinstance(self.weak_keys, frozenset):
            object.__setattr__(self, "weak_keys", frozenset(self.weak_keys))

    def threshold_for(self, strategy: SimilarityStrategy) -> float:
        """Return the acceptance threshold that applies under ``strategy``."""
        if self.match_threshold is not None:
            return self.match_threshold
        return _BINARY_THRESHOLD if strategy.is_binary else _WEIGHTED_THRESHOLD
