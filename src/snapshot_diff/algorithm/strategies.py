"""The three "fairly similar" strategies that score identifying attributes.

- STRICT (1):   strong attribute sets equal and a weak key shared -> 1, else 0.
- SIMILAR (2):  every strong attribute Jaro–Winkler similar (> 0.3) and a weak
                key shared -> 1, else 0.
- WEIGHTED (3): ``S / U`` where ``U`` (the unifying factor) is the summed
                weight of all non-ignored attributes on either side and ``S``
                the summed ``weight * match`` of the non-ignored left
                attributes against their right counterparts.

The process-wide selector is read once from ``SNAPSHOT_DIFF_FAIRLY_SIMILAR_INSTANCE``
and cached; ``DiffConfig.similarity_strategy`` overrides it per comparator.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Callable
from typing import TYPE_CHECKING

from snapshot_diff.algorithm.config import DiffConfig, SimilarityStrategy
from snapshot_diff.algorithm.strings import jaro_winkler_similarity
from snapshot_diff.ignore import get_default_registry

if TYPE_CHECKING:
    from snapshot_diff.attributes import Attribute
    from snapshot_diff.descriptors import IdentifyingAttributes
    from snapshot_diff.protocols import IgnorePolicy

__all__ = [
    "FAIRLY_SIMILAR_INSTANCE_ENV",
    "STRONG_SIMILARITY_THRESHOLD",
    "default_strategy",
    "fairly_similar_strict",
    "fairly_similar_strong",
    "fairly_similar_weighted",
    "reset_default_strategy",
    "score",
]

logger = logging.getLogger(__name__)

FAIRLY_SIMILAR_INSTANCE_ENV = "SNAPSHOT_DIFF_FAIRLY_SIMILAR_INSTANCE"
STRONG_SIMILARITY_THRESHOLD = 0.3

_DEFAULT_CONFIG = DiffConfig()

StrategyFunction = Callable[
    ["IdentifyingAttributes", "IdentifyingAttributes", DiffConfig, "IgnorePolicy"],
    float,
]


@functools.cache
def default_strategy() -> SimilarityStrategy:
    """Resolve the process-wide strategy from the environment (once)."""
    selector = os.environ.get(FAIRLY_SIMILAR_INSTANCE_ENV, SimilarityStrategy.WEIGHTED)
    strategy = SimilarityStrategy.from_selector(selector)
    logger.debug("Fairly similar instance is set to '%s'.", strategy.value)
    return strategy


def reset_default_strategy() -> None:
    """Forget the cached selector so the environment is read again."""
    default_strategy.cache_clear()


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------


def _strong_attributes(
    attributes: IdentifyingAttributes, strong_keys: frozenset[str]
) -> frozenset[Attribute]:
    return frozenset(a for a in attributes.attributes if a.key in strong_keys)


def _weak_keys_present(
    left: IdentifyingAttributes,
    right: IdentifyingAttributes,
    weak_keys: frozenset[str],
) -> bool:
    return bool(weak_keys & set(left.keys()) & set(right.keys()))


def _as_text(value: object) -> str:
    return "" if value is None else str(value)


# ----------------------------------------------------------------------
# Strategies
# ----------------------------------------------------------------------


def fairly_similar_strict(
    left: IdentifyingAttributes,
    right: IdentifyingAttributes,
    config: DiffConfig,
    ignore: IgnorePolicy,
) -> float:
    if _strong_attributes(left, config.strong_keys) != _strong_attributes(
        right, config.strong_keys
    ):
        return 0.0
    if not _weak_keys_present(left, right, config.weak_keys):
        return 0.0
    return 1.0


def fairly_similar_strong(
    left: IdentifyingAttributes,
    right: IdentifyingAttributes,
    config: DiffConfig,
    ignore: IgnorePolicy,
) -> float:
    for attribute in _strong_attributes(left, config.strong_keys):
        similarity = jaro_winkler_similarity(
            _as_text(left.get(attribute.key)), _as_text(right.get(attribute.key))
        )
        if similarity <= STRONG_SIMILARITY_THRESHOLD:
            return 0.0
    if not _weak_keys_present(left, right, config.weak_keys):
        return 0.0
    return 1.0


def fairly_similar_weighted(
    left: IdentifyingAttributes,
    right: IdentifyingAttributes,
    config: DiffConfig,
    ignore: IgnorePolicy,
) -> float:
    """Weighted average of attribute matches.

    Raises:
        ZeroDivisionError: When every attribute on both sides is ignored.
        AssertionError: When the score leaves [0, 1].
    """
    result = 0.0
    unifying_factor = 0.0
    for attribute in left.attributes:
        if ignore.should_ignore_attribute(attribute.key):
            continue
        unifying_factor += attribute.weight
        other = right.get_attribute(attribute.key)
        if other is not None:
            result += attribute.weight * attribute.match(other)
    for attribute in right.attributes:
        if attribute.key in left or ignore.should_ignore_attribute(attribute.key):
            continue
        unifying_factor += attribute.weight

    if unifying_factor == 0.0:
        msg = "Cannot divide with a unifying factor of 0.0"
        raise ZeroDivisionError(msg)
    result /= unifying_factor
    if not 0.0 <= result <= 1.0:
        msg = f"Match result {result} should be in [0,1]."
        raise AssertionError(msg)
    return result


_STRATEGIES: dict[SimilarityStrategy, StrategyFunction] = {
    SimilarityStrategy.STRICT: fairly_similar_strict,
    SimilarityStrategy.SIMILAR: fairly_similar_strong,
    SimilarityStrategy.WEIGHTED: fairly_similar_weighted,
}


def score(
    left: IdentifyingAttributes,
    right: IdentifyingAttributes,
    config: DiffConfig | None = None,
    ignore: IgnorePolicy | None = None,
) -> float:
    """Score ``left`` against ``right`` with the configured strategy.

    Args:
        left:   Identifying attributes of the expected element.
        right:  Identifying attributes of the actual element.
        config: Matching configuration; its ``similarity_strategy`` wins over
            the process-wide selector when set.
        ignore: Ignore policy; defaults to the process-wide registry.

    Returns:
        Float in [0.0, 1.0]; exactly 0.0 or 1.0 for the binary strategies.
    """
    if config is None:
        config = _DEFAULT_CONFIG
    if ignore is None:
        ignore = get_default_registry()
    strategy = config.similarity_strategy or default_strategy()
    return _STRATEGIES[strategy](left, right, config, ignore)
