"""Tests for the attribute variants: match, compare_to, hashing and apply_change."""

from __future__ import annotations

import enum
from dataclasses import FrozenInstanceError

import pytest

from snapshot_diff.attributes import (
    COMPARE_EQUAL,
    Attribute,
    EnumAttribute,
    NumericAttribute,
    ObjectAttribute,
    OutlineAttribute,
    PathAttribute,
    Rectangle,
    StringAttribute,
    SuffixAttribute,
)
from snapshot_diff.attributes.base import canonical_form, value_hash


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


# ---------------------------------------------------------------------------
# Common contract
# ---------------------------------------------------------------------------


SAMPLES: list[Attribute] = [
    StringAttribute("text", "OK"),
    NumericAttribute("x", 10),
    EnumAttribute("enabled", True),
    EnumAttribute("color", Color.RED),
    ObjectAttribute("items", ["a", "b"]),
    PathAttribute("/a[1]/b[2]"),
    SuffixAttribute(2),
    OutlineAttribute((0, 0, 10, 20)),
]


class TestContract:
    @pytest.mark.parametrize("attribute", SAMPLES, ids=lambda a: type(a).__name__)
    def test_match_self_is_one(self, attribute: Attribute) -> None:
        assert attribute.match(attribute) == 1.0

    @pytest.mark.parametrize("attribute", SAMPLES, ids=lambda a: type(a).__name__)
    def test_match_none_is_zero(self, attribute: Attribute) -> None:
        assert attribute.match(None) == 0.0

    @pytest.mark.parametrize("attribute", SAMPLES, ids=lambda a: type(a).__name__)
    def test_compare_to_self_is_equal(self, attribute: Attribute) -> None:
        assert attribute.compare_to(attribute) == COMPARE_EQUAL

    @pytest.mark.parametrize("attribute", SAMPLES, ids=lambda a: type(a).__name__)
    def test_none_sorts_first(self, attribute: Attribute) -> None:
        assert attribute.compare_to(None) == 1

    @pytest.mark.parametrize("attribute", SAMPLES, ids=lambda a: type(a).__name__)
    def test_hashable(self, attribute: Attribute) -> None:
        assert isinstance(hash(attribute), int)

    def test_negative_weight_raises(self) -> None:
        with pytest.raises(ValueError, match="weight"):
            StringAttribute("text", "OK", weight=-1.0)

    def test_negative_weight_raises_for_path(self) -> None:
        with pytest.raises(ValueError, match="weight"):
            PathAttribute("/a[1]", weight=-0.5)

    def test_frozen(self) -> None:
        attribute = StringAttribute("text", "OK")
        with pytest.raises(FrozenInstanceError):
            attribute.value = "Cancel"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Variant-specific matching
# ---------------------------------------------------------------------------


class TestStringAttribute:
    def test_jaro_winkler_match(self) -> None:
        left = StringAttribute("text", "MARTHA")
        right = StringAttribute("text", "MARHTA")
        assert left.match(right) == pytest.approx(0.9611, abs=1e-4)

    def test_none_value_against_text_is_zero(self) -> None:
        assert StringAttribute("text", None).match(StringAttribute("text", "x")) == 0.0

    def test_two_none_values_are_equal(self) -> None:
        assert StringAttribute("text", None).match(StringAttribute("text", None)) == 1.0


class TestNumericAttribute:
    def test_relative_distance(self) -> None:
        assert NumericAttribute("x", 80).match(NumericAttribute("x", 100)) == pytest.approx(0.8)

    def test_both_zero_is_one(self) -> None:
        assert NumericAttribute("x", 0).match(NumericAttribute("x", 0.0)) == 1.0

    def test_opposite_signs_clamped_to_zero(self) -> None:
        assert NumericAttribute("x", -10).match(NumericAttribute("x", 10)) == 0.0

    def test_non_numeric_other_is_zero(self) -> None:
        assert NumericAttribute("x", 1).match(StringAttribute("x", "1")) == 0.0


class TestBinaryVariants:
    def test_enum_unequal_is_zero(self) -> None:
        assert EnumAttribute("color", Color.RED).match(EnumAttribute("color", Color.BLUE)) == 0.0

    def test_object_unequal_is_zero(self) -> None:
        assert ObjectAttribute("items", [1]).match(ObjectAttribute("items", [2])) == 0.0

    def test_path_unequal_is_zero(self) -> None:
        assert PathAttribute("/a[1]/b[1]").match(PathAttribute("/a[1]/b[2]")) == 0.0

    def test_suffix_unequal_is_zero(self) -> None:
        assert SuffixAttribute(1).match(SuffixAttribute(2)) == 0.0

    def test_object_equal_unhashable_values_hash_equal(self) -> None:
        assert hash(ObjectAttribute("items", {"a": 1})) == hash(ObjectAttribute("items", {"a": 1}))


class TestOutlineAttribute:
    def test_normalized_l1_similarity(self) -> None:
        left = OutlineAttribute(Rectangle(0, 0, 100, 100))
        right = OutlineAttribute(Rectangle(0, 0, 100, 50))
        # 1 - 50 / 200
        assert left.match(right) == pytest.approx(0.75)

    def test_all_zero_rectangles_are_identical(self) -> None:
        assert OutlineAttribute((0, 0, 0, 0)).match(OutlineAttribute((0, 0, 0, 0))) == 1.0

    def test_accepts_mapping(self) -> None:
        attribute = OutlineAttribute({"x": 1, "y": 2, "width": 3, "height": 4})  # type: ignore[arg-type]
        assert attribute.value == Rectangle(1, 2, 3, 4)

    def test_default_key(self) -> None:
        assert OutlineAttribute((0, 0, 1, 1)).key == "outline"


# ---------------------------------------------------------------------------
# compare_to total order
# ---------------------------------------------------------------------------


class TestCompareTo:
    def test_orders_by_key_first(self) -> None:
        assert StringAttribute("a", "z").compare_to(StringAttribute("b", "a")) == -1

    def test_orders_by_value_within_key(self) -> None:
        assert StringAttribute("text", "a").compare_to(StringAttribute("text", "b")) == -1
        assert StringAttribute("text", "b").compare_to(StringAttribute("text", "a")) == 1

    def test_numeric_order(self) -> None:
        assert NumericAttribute("x", 2).compare_to(NumericAttribute("x", 10)) == -1

    def test_weight_breaks_ties(self) -> None:
        light = StringAttribute("text", "a", weight=0.5)
        heavy = StringAttribute("text", "a", weight=2.0)
        assert light.compare_to(heavy) == -1
        assert heavy.compare_to(light) == 1

    def test_antisymmetric_and_consistent_with_equality(self) -> None:
        for left in SAMPLES:
            for right in SAMPLES:
                forward = left.compare_to(right)
                assert forward == -right.compare_to(left)
                assert (forward == COMPARE_EQUAL) == (left == right)

    def test_sorting_is_transitive(self) -> None:
        ordered = sorted(SAMPLES)
        for i, left in enumerate(ordered):
            for right in ordered[i + 1 :]:
                assert left.compare_to(right) <= 0


class TestEqualValues:
    """Values comparing equal hash and order alike."""

    def test_dicts_in_different_insertion_order(self) -> None:
        first = ObjectAttribute("items", {"a": 1, "b": 2})
        second = ObjectAttribute("items", {"b": 2, "a": 1})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
        assert first.compare_to(second) == COMPARE_EQUAL

    def test_int_and_float(self) -> None:
        first = ObjectAttribute("items", [1, 2])
        second = ObjectAttribute("items", [1.0, 2.0])
        assert first == second
        assert hash(first) == hash(second)

    def test_order_against_third_value_agrees(self) -> None:
        first = ObjectAttribute("items", {"a": 1, "b": 2})
        second = ObjectAttribute("items", {"b": 2, "a": 1})
        third = ObjectAttribute("items", {"a": 1, "b": 3})
        assert first.compare_to(third) == second.compare_to(third)
        assert third.compare_to(first) == third.compare_to(second)

    def test_canonical_form(self) -> None:
        assert canonical_form({"b": 2.0, "a": [1, (True,)]}) == canonical_form(
            {"a": [1.0, (1,)], "b": 2}
        )
        assert canonical_form({"a"}) != canonical_form(["a"])

    def test_value_hash(self) -> None:
        assert value_hash({"a": [1]}) == value_hash({"a": [1.0]})
        assert value_hash({1, 2}) == value_hash(frozenset({2, 1}))
        assert value_hash("x") == hash("x")


# ---------------------------------------------------------------------------
# apply_change
# ---------------------------------------------------------------------------


class TestApplyChange:
    def test_returns_new_attribute_with_value(self) -> None:
        original = StringAttribute("text", "hi", weight=2.0)
        changed = original.apply_change("hello")
        assert changed == StringAttribute("text", "hello", weight=2.0)
        assert original.value == "hi"

    def test_path_reparses(self) -> None:
        changed = PathAttribute("/a[1]").apply_change("/b[2]")
        assert isinstance(changed, PathAttribute)
        assert str(changed.value) == "/b[2]"

    def test_outline_keeps_key(self) -> None:
        changed = OutlineAttribute((0, 0, 1, 1), key="bounds").apply_change((1, 1, 2, 2))
        assert changed.key == "bounds"
        assert changed.value == Rectangle(1, 1, 2, 2)
