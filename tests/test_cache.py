"""Unit tests for MatchCache.

Tests cover:
- Cache hits (a scored pair is not scored again)
- Direction matters ((a, b) and (b, a) are separate entries)
- LRU eviction (silent eviction at max_size; evicted pairs are re-scored)
- Instance isolation (separate MatchCache instances do not share state)
- Errors are not cached
- Properties (max_size and curr_size return correct values)
"""

from __future__ import annotations

import pytest

from snapshot_diff.algorithm.config import DiffConfig, SimilarityStrategy
from snapshot_diff.attributes import StringAttribute
from snapshot_diff.cache import MatchCache
from snapshot_diff.descriptors import IdentifyingAttributes
from snapshot_diff.ignore import IgnoreRegistry

CONFIG = DiffConfig(similarity_strategy=SimilarityStrategy.WEIGHTED)
NO_IGNORE = IgnoreRegistry()


def _ids(text: str) -> IdentifyingAttributes:
    return IdentifyingAttributes.create("/a[1]/b[1]", "a.Label", StringAttribute("text", text))


class _IgnoreAll:
    def should_ignore_attribute(self, key: str) -> bool:
        return True


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestHits:
    def test_second_lookup_is_a_hit(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE)
        first = cache.score(_ids("hi"), _ids("hello"))
        second = cache.score(_ids("hi"), _ids("hello"))
        assert first == second
        assert cache.misses == 1
        assert cache.hits == 1

    def test_score_matches_direct_match(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE)
        left, right = _ids("hi"), _ids("hello")
        assert cache.score(left, right) == left.match(right, CONFIG, NO_IGNORE)

    def test_zero_score_is_cached(self) -> None:
        cache = MatchCache(DiffConfig(similarity_strategy=SimilarityStrategy.STRICT), NO_IGNORE)
        left = IdentifyingAttributes.create("/a[1]", "a.B", StringAttribute("id", "x"))
        right = IdentifyingAttributes.create("/a[1]", "a.B", StringAttribute("id", "y"))
        assert cache.score(left, right) == 0.0
        assert cache.score(left, right) == 0.0
        assert cache.hits == 1

    def test_direction_is_part_of_the_key(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE)
        cache.score(_ids("a"), _ids("b"))
        cache.score(_ids("b"), _ids("a"))
        assert cache.misses == 2
        assert cache.curr_size == 2


class TestEviction:
    def test_lru_eviction(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE, max_size=2)
        cache.score(_ids("a"), _ids("a"))
        cache.score(_ids("b"), _ids("b"))
        cache.score(_ids("c"), _ids("c"))
        assert cache.curr_size == 2
        cache.score(_ids("a"), _ids("a"))
        assert cache.misses == 4

    def test_recently_used_entry_survives(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE, max_size=2)
        cache.score(_ids("a"), _ids("a"))
        cache.score(_ids("b"), _ids("b"))
        cache.score(_ids("a"), _ids("a"))
        cache.score(_ids("c"), _ids("c"))
        cache.score(_ids("a"), _ids("a"))
        assert cache.hits == 2

    def test_clear(self) -> None:
        cache = MatchCache(CONFIG, NO_IGNORE)
        cache.score(_ids("a"), _ids("a"))
        cache.clear()
        assert cache.curr_size == 0


class TestIsolationAndErrors:
    def test_instances_do_not_share_state(self) -> None:
        first = MatchCache(CONFIG, NO_IGNORE)
        second = MatchCache(CONFIG, NO_IGNORE)
        first.score(_ids("a"), _ids("a"))
        assert second.curr_size == 0

    def test_errors_propagate_and_are_not_cached(self) -> None:
        cache = MatchCache(CONFIG, _IgnoreAll())
        for _ in range(2):
            with pytest.raises(ZeroDivisionError):
                cache.score(_ids("a"), _ids("a"))
        assert cache.curr_size == 0
        assert cache.misses == 2


class TestProperties:
    def test_max_size_default(self) -> None:
        assert MatchCache().max_size == 4096

    def test_max_size_custom(self) -> None:
        assert MatchCache(max_size=10).max_size == 10

    def test_curr_size_starts_at_zero(self) -> None:
        assert MatchCache().curr_size == 0
