"""SnapshotBuilder: converts plain nested mappings into an Element tree.

A snapshot node is a mapping with the keys::

    {
        "type": "javax.swing.JButton",       # required
        "path": "/window[1]/button[2]",      # optional, derived when absent
        "identifying": {"text": "OK", ...},  # optional identifying attributes
        "state": {"enabled": True, ...},     # optional state attributes
        "children": [ ... ],                 # optional child nodes
    }

When ``path`` is absent it is derived from the parent path: the segment name
is the node's simple type and the suffix counts the preceding siblings with
the same simple type (1-based).  Identifying values are wrapped with
``attribute_for``, so the Python type of each value picks the attribute
variant; ``weights`` overrides the default weight per key.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from snapshot_diff.attributes import ElementPath, attribute_for
from snapshot_diff.descriptors import IdentifyingAttributes
from snapshot_diff.tree.element import Element

__all__ = ["SnapshotBuilder"]


@dataclass
class SnapshotBuilder:
    """Converts snapshot mappings into ``Element`` trees.

    Attributes:
        weights: Per-key attribute weights, e.g. ``{"path": 2.0}``.  Keys not
            listed keep the default weight of 1.0.

    Example::
        builder = SnapshotBuilder()
        tree = builder.build({"type": "a.B", "children": [{"type": "x.Y"}]})
        # tree.path == "/B[1]", tree.children[0].path == "/B[1]/Y[1]"
    """

    weights: Mapping[str, float] = field(default_factory=dict)

    def build(self, node: Mapping[str, Any], parent: ElementPath | None = None) -> Element:
        """Convert one snapshot node (and its subtree) to an ``Element``.

        Args:
            node:   Snapshot mapping as described in the module docstring.
            parent: Path of the parent element; ``None`` for a root.

        Returns:
            The built element.

        Raises:
            TypeError: If ``node`` or one of its sections has the wrong type.
            ValueError: If the type is blank or a path is malformed.
        """
        return self._build(node, parent, suffix=1)

    def _build(
        self, node: Mapping[str, Any], parent: ElementPath | None, suffix: int
    ) -> Element:
        if not isinstance(node, Mapping):
            raise TypeError(f"Unsupported snapshot node type: {type(node)!r}")

        type_ = node.get("type")
        path = self._resolve_path(node, type_, parent, suffix)

        identifying = _section(node, "identifying")
        extra = [
            attribute_for(key, value, self.weights.get(key, 1.0))
            for key, value in identifying.items()
        ]
        mandatory = [
            self._weighted(attribute)
            for attribute in IdentifyingAttributes.create_list(path, type_)
        ]
        ids = IdentifyingAttributes([*mandatory, *extra])

        raw_children = node.get("children") or []
        if not isinstance(raw_children, (list, tuple)):
            raise TypeError(f"'children' must be a list, got {type(raw_children)!r}")

        seen: Counter[str] = Counter()
        children = []
        for child in raw_children:
            child_suffix = 1
            if isinstance(child, Mapping) and "path" not in child:
                name = _simple_name(child.get("type"))
                seen[name] += 1
                child_suffix = seen[name]
            children.append(self._build(child, path, child_suffix))

        return Element(
            identifying_attributes=ids,
            attributes=_section(node, "state"),
            children=tuple(children),
        )

    def _weighted(self, attribute: Any) -> Any:
        weight = self.weights.get(attribute.key)
        if weight is None or weight == attribute.weight:
            return attribute
        return attribute_for(attribute.key, attribute.value, weight)

    @staticmethod
    def _resolve_path(
        node: Mapping[str, Any],
        type_: str | None,
        parent: ElementPath | None,
        suffix: int,
    ) -> ElementPath:
        explicit = node.get("path")
        if explicit is not None:
            return ElementPath.of(explicit)
        name = _simple_name(type_)
        if parent is None:
            return ElementPath.parse(f"{name}[{suffix}]")
        return parent.child(name, suffix)


def _simple_name(type_: Any) -> str:
    if type_ is None or not str(type_).strip():
        raise ValueError("Type must not be empty.")
    return str(type_).strip().rsplit(".", 1)[-1]


def _section(node: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = node.get(key) or {}
    if not isinstance(value, Mapping):
        raise TypeError(f"{key!r} must be a mapping, got {type(value)!r}")
    return value
