"""Tests for the public API functions: compare, match_score, is_equivalent, replay_*.

All tests use plain snapshot mappings and the default configuration unless a
test says otherwise.
"""

from __future__ import annotations

from typing import Any

import pytest

from snapshot_diff import (
    PERFECT_SIMILARITY,
    AssignmentMode,
    Check,
    ComparisonResult,
    DiffConfig,
    Element,
    IdentifyingAttributes,
    IgnoreRegistry,
    SimilarityStrategy,
    SnapshotBuilder,
    StateComparator,
    compare,
    get_default_registry,
    is_equivalent,
    match_score,
    replay_suite,
    replay_test,
    set_default_registry,
)


def _label(text: str) -> dict[str, Any]:
    return {"type": "a.Label", "identifying": {"text": text}}


def _window(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "a.Window", "children": list(children)}


class TestCompare:
    def test_returns_comparison_result(self) -> None:
        result = compare(_window(), _window())
        assert isinstance(result, ComparisonResult)
        assert result.is_empty()

    def test_detects_change(self) -> None:
        result = compare(_window(_label("hi")), _window(_label("hello")))
        assert result.differences_count == 1

    def test_config_passthrough(self) -> None:
        button = {"type": "a.Button", "identifying": {"id": "ok"}}
        expected = _window({**button, "path": "/Window[1]/Button[1]"})
        actual = _window({**button, "path": "/Window[1]/Button[2]"})
        strict_config = DiffConfig(similarity_strategy=SimilarityStrategy.STRICT)
        weighted = compare(expected, actual)
        strict = compare(expected, actual, strict_config)
        assert weighted.deleted_count == 1
        assert strict.deleted_count == 0

    def test_ignore_passthrough(self) -> None:
        expected = _window(_label("hi"))
        actual = _window(_label("hello"))
        assert compare(expected, actual, ignore=IgnoreRegistry(attributes={"text"})).is_empty()

    def test_no_state_between_calls(self) -> None:
        first = compare(_window(_label("a")), _window(_label("b")))
        second = compare(_window(_label("a")), _window(_label("b")))
        assert first.differences_count == second.differences_count


class TestMatchScore:
    def test_identical(self) -> None:
        assert match_score(_label("OK"), _label("OK")) == 1.0

    def test_children_do_not_count(self) -> None:
        assert match_score(_window(_label("x")), _window()) == 1.0

    def test_one_of_four_differs(self) -> None:
        assert match_score(_label("OK"), _label("xyz")) == pytest.approx(0.75)

    def test_accepts_identifying_attributes_and_elements(self) -> None:
        element = SnapshotBuilder().build(_label("OK"))
        ids = element.identifying_attributes
        assert match_score(element, ids) == 1.0

    def test_binary_strategy(self) -> None:
        config = DiffConfig(similarity_strategy=SimilarityStrategy.STRICT)
        assert match_score(_label("OK"), _label("xyz"), config) == 1.0

    def test_all_ignored_raises(self) -> None:
        ignore = IgnoreRegistry(patterns=[".*"])
        with pytest.raises(ZeroDivisionError):
            match_score(_label("OK"), _label("OK"), ignore=ignore)

    def test_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            match_score(42, _label("OK"))  # type: ignore[arg-type]


class TestIsEquivalent:
    def test_identical(self) -> None:
        assert is_equivalent(_window(_label("hi")), _window(_label("hi")))

    def test_changed(self) -> None:
        assert not is_equivalent(_window(_label("hi")), _window(_label("hello")))

    def test_returns_bool(self) -> None:
        assert isinstance(is_equivalent(_window(), _window()), bool)


class TestReplay:
    def test_replay_test(self) -> None:
        test = replay_test(
            "valid credentials",
            [
                Check("start", _window(), _window()),
                ("after submit", _window(_label("hi")), _window(_label("hello"))),
            ],
        )
        assert test.finalized
        assert [a.name for a in test.action_replay_results] == ["start", "after submit"]
        assert test.differences_count == 1

    def test_replay_test_with_metadata(self) -> None:
        check = Check("start", _window(), _window(), {"browser": "firefox"}, {"browser": "chrome"})
        (action,) = replay_test("t", [check]).action_replay_results
        assert action.metadata_difference.keys() == frozenset({"browser"})

    def test_replay_suite(self) -> None:
        suite = replay_suite(
            "login",
            {
                "unchanged": [Check("start", _window(), _window())],
                "changed": [Check("submit", _window(_label("a")), _window())],
            },
        )
        assert suite.finalized
        assert [t.name for t in suite.test_replay_results] == ["unchanged", "changed"]
        assert suite.deleted_count == 1
        assert not suite.is_empty()

    def test_failing_check_propagates(self) -> None:
        with pytest.raises(ValueError):
            replay_test("t", [Check("bad", {"type": " "}, _window())])


class TestTopLevelImports:
    def test_all_symbols_importable(self) -> None:
        assert PERFECT_SIMILARITY == 3.0
        assert AssignmentMode.GREEDY == "greedy"
        assert isinstance(SnapshotBuilder().build(_window()), Element)
        assert IdentifyingAttributes.create("/a[1]", "a.B").simple_type == "B"
        assert isinstance(StateComparator(), StateComparator)

    def test_default_registry_accessors(self) -> None:
        registry = IgnoreRegistry()
        set_default_registry(registry)
        assert get_default_registry() is registry
