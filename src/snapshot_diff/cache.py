"""MatchCache: LRU-backed cache of identification scores.

Scoring two sets of identifying attributes runs a Jaro–Winkler comparison per
string attribute, and the matcher scores the same pair again whenever a
comparator is reused on similar snapshots.  ``MatchCache`` memoizes
``IdentifyingAttributes.match`` per ``(expected, actual)`` pair.  LRU
eviction occurs silently when ``max_size`` is exceeded.

Each ``MatchCache`` instance maintains its own ``LRUCache``; there is no
class-level shared state.  The cache is bound to one configuration and one
ignore policy: a comparator creates it with both, and a changed ignore
registry requires ``clear()``.

Example::

    from snapshot_diff.cache import MatchCache

    cache = MatchCache(max_size=4096)
    cache.score(expected.identifying_attributes, actual.identifying_attributes)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cachetools import LRUCache

from snapshot_diff.algorithm import strategies

if TYPE_CHECKING:
    from snapshot_diff.algorithm.config import DiffConfig
    from snapshot_diff.descriptors import IdentifyingAttributes
    from snapshot_diff.protocols import IgnorePolicy

__all__ = ["MatchCache"]


class MatchCache:
    """LRU cache around the configured similarity strategy.

    Args:
        config: Matching configuration forwarded to the strategy.
        ignore: Ignore policy forwarded to the strategy.
        max_size: Maximum number of pair scores to hold in memory.
            Defaults to 4096.
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        ignore: IgnorePolicy | None = None,
        max_size: int = 4096,
    ) -> None:
        self._config = config
        self._ignore = ignore
        self._cache: LRUCache[tuple[IdentifyingAttributes, IdentifyingAttributes], float] = (
            LRUCache(maxsize=max_size)
        )
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self, left: IdentifyingAttributes, right: IdentifyingAttributes) -> float:
        """Return ``left.match(right)``, computing it only on a cache miss.

        Errors raised by the strategy (``ZeroDivisionError`` for an all-ignored
        pair) propagate and nothing is cached.
        """
        key = (left, right)
        cached = self._cache.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        value = strategies.score(left, right, self._config, self._ignore)
        self._cache[key] = value
        return value

    def clear(self) -> None:
        self._cache.clear()
