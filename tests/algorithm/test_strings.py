"""Tests for the string metrics: Jaro–Winkler similarity and Levenshtein distance."""

from __future__ import annotations

import pytest

from snapshot_diff.algorithm.strings import jaro_winkler_similarity, levenshtein_distance

# ---------------------------------------------------------------------------
# jaro_winkler_similarity
# ---------------------------------------------------------------------------


class TestJaroWinkler:
    def test_identical_strings_score_one(self) -> None:
        assert jaro_winkler_similarity("button", "button") == 1.0

    def test_two_empty_strings_score_one(self) -> None:
        assert jaro_winkler_similarity("", "") == 1.0

    def test_empty_against_non_empty_scores_zero(self) -> None:
        assert jaro_winkler_similarity("", "abc") == 0.0

    def test_no_common_characters_scores_zero(self) -> None:
        assert jaro_winkler_similarity("abc", "xyz") == 0.0

    @pytest.mark.parametrize(
        ("a", "b", "expected"),
        [
            ("MARTHA", "MARHTA", 0.9611),
            ("DWAYNE", "DUANE", 0.84),
            ("DIXON", "DICKSONX", 0.8133),
        ],
    )
    def test_reference_values(self, a: str, b: str, expected: float) -> None:
        assert jaro_winkler_similarity(a, b) == pytest.approx(expected, abs=1e-4)

    def test_symmetric(self) -> None:
        assert jaro_winkler_similarity("DWAYNE", "DUANE") == pytest.approx(
            jaro_winkler_similarity("DUANE", "DWAYNE")
        )

    def test_low_jaro_gets_no_prefix_bonus(self) -> None:
        # jaro("hi", "hello") = (1/2 + 1/5 + 1) / 3, below the 0.7 boost threshold
        assert jaro_winkler_similarity("hi", "hello") == pytest.approx(1.7 / 3.0)

    def test_result_in_unit_interval(self) -> None:
        for a, b in [("ok", "okay"), ("Cancel", "cancel"), ("x", "xxxxxxxx")]:
            assert 0.0 <= jaro_winkler_similarity(a, b) <= 1.0


# ---------------------------------------------------------------------------
# levenshtein_distance
# ---------------------------------------------------------------------------


class TestLevenshtein:
    def test_identical_is_zero(self) -> None:
        assert levenshtein_distance("/a[1]/b[2]", "/a[1]/b[2]") == 0

    def test_against_empty_is_length(self) -> None:
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3

    def test_classic_example(self) -> None:
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_single_suffix_change(self) -> None:
        assert levenshtein_distance("/a[1]/b[1]", "/a[1]/b[2]") == 1

    def test_symmetric(self) -> None:
        assert levenshtein_distance("flaw", "lawn") == levenshtein_distance("lawn", "flaw")
