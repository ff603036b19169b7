"""Tests for the difference records."""

from __future__ import annotations

from snapshot_diff.attributes import StringAttribute
from snapshot_diff.descriptors import IdentifyingAttributes
from snapshot_diff.differences import (
    AttributeDifference,
    ChangeKind,
    DeletedDifference,
    ElementDifference,
    InsertedDifference,
)
from snapshot_diff.tree import Element


def _element(path: str, *children: Element) -> Element:
    return Element(IdentifyingAttributes.create(path, "a.Panel"), {}, children)


class TestAttributeDifference:
    def test_apply_change_to_existing(self) -> None:
        difference = AttributeDifference("text", "a", "b")
        changed = difference.apply_change_to(StringAttribute("text", "a", 2.0))
        assert changed == StringAttribute("text", "b", 2.0)

    def test_apply_change_to_missing_builds_attribute(self) -> None:
        assert AttributeDifference("text", None, "b").apply_change_to(None) == StringAttribute(
            "text", "b"
        )

    def test_hashable_with_unhashable_values(self) -> None:
        first = AttributeDifference("k", [1], {"a": 1})
        second = AttributeDifference("k", [1], {"a": 1})
        assert len({first, second}) == 1

    def test_equal_dicts_in_different_order_hash_equal(self) -> None:
        first = AttributeDifference("style", {"a": 1, "b": 2}, None)
        second = AttributeDifference("style", {"b": 2, "a": 1}, None)
        assert first == second
        assert hash(first) == hash(second)


class TestChildDifference:
    def test_kind_and_size(self) -> None:
        subtree = _element("/a[1]/b[1]", _element("/a[1]/b[1]/c[1]"))
        inserted = InsertedDifference(subtree, "/a[1]")
        deleted = DeletedDifference(subtree, "/a[1]")
        assert inserted.kind is ChangeKind.INSERTED
        assert deleted.kind is ChangeKind.DELETED
        assert inserted.size == deleted.size == 2
        assert inserted.identifying_attributes is subtree.identifying_attributes


class TestElementDifference:
    def test_empty(self) -> None:
        element = _element("/a[1]")
        assert ElementDifference(element, element).is_empty()

    def test_nested_changes_make_it_non_empty(self) -> None:
        element = _element("/a[1]")
        child = ElementDifference(element, element, (AttributeDifference("v", 1, 2),))
        parent = ElementDifference(element, element, children=(child,))
        assert not parent.has_own_changes
        assert not parent.is_empty()

    def test_iter_child_differences_document_order(self) -> None:
        element = _element("/a[1]")
        first = InsertedDifference(_element("/a[1]/x[1]"), "/a[1]")
        second = DeletedDifference(_element("/a[1]/b[1]/y[1]"), "/a[1]/b[1]")
        child = ElementDifference(element, element, child_differences=(second,))
        parent = ElementDifference(element, element, child_differences=(first,), children=(child,))
        assert list(parent.iter_child_differences()) == [first, second]
