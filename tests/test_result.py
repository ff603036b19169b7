"""Tests for ComparisonResult: construction, immutability and is_empty()."""

from __future__ import annotations

import dataclasses
from typing import Any

import pytest

from snapshot_diff.result import ComparisonResult

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _result(**overrides: Any) -> ComparisonResult:
    fields: dict[str, Any] = {
        "root_score": 1.0,
        "differences": (),
        "matched_pairs": [("/a[1]", "/a[1]")],
        "deleted_paths": [],
        "inserted_paths": [],
        "differences_count": 0,
        "deleted_count": 0,
        "created_count": 0,
        "maintained_count": 1,
        "computation_time_ms": 0.5,
    }
    fields.update(overrides)
    return ComparisonResult(**fields)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestComparisonResult:
    def test_field_access(self) -> None:
        result = _result()
        assert result.root_score == 1.0
        assert result.matched_pairs == [("/a[1]", "/a[1]")]
        assert result.maintained_count == 1

    def test_all_fields_declared(self) -> None:
        names = {f.name for f in dataclasses.fields(ComparisonResult)}
        assert names == {
            "root_score",
            "differences",
            "matched_pairs",
            "deleted_paths",
            "inserted_paths",
            "differences_count",
            "deleted_count",
            "created_count",
            "maintained_count",
            "computation_time_ms",
        }

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _result().root_score = 0.5  # type: ignore[misc]

    def test_equality(self) -> None:
        assert _result() == _result()
        assert _result() != _result(computation_time_ms=1.0)


class TestIsEmpty:
    def test_maintained_only(self) -> None:
        assert _result(maintained_count=10).is_empty()

    @pytest.mark.parametrize("field", ["differences_count", "deleted_count", "created_count"])
    def test_any_change(self, field: str) -> None:
        assert not _result(**{field: 1}).is_empty()
