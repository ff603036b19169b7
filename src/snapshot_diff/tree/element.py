"""Element: one node of a UI snapshot tree.

An element couples the identifying attributes used to recognize it with the
state attributes that are compared once it has been recognized, plus its
ordered children.  Elements are immutable; children order is significant
for reporting but not for matching.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from snapshot_diff.descriptors import IdentifyingAttributes

__all__ = ["Element", "assert_acyclic"]


@dataclass(frozen=True, slots=True)
class Element:
    """A node in a UI state tree.

    Attributes:
        identifying_attributes: Attributes used to recognize the element.
        attributes: State attributes (key -> free-form value), read-only.
        children:   Child elements in document order.
    """

    identifying_attributes: IdentifyingAttributes
    attributes: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @property
    def identifier(self) -> str:
        """SHA-256 identifier of the identifying attributes."""
        return self.identifying_attributes.identifier()

    @property
    def path(self) -> str:
        return self.identifying_attributes.path

    @property
    def simple_type(self) -> str:
        return self.identifying_attributes.simple_type

    def get(self, key: str) -> Any:
        """State value for ``key``, falling back to the identifying attribute."""
        if key in self.attributes:
            return self.attributes[key]
        return self.identifying_attributes.get(key)

    def iter_tree(self) -> Iterator[Element]:
        """Yield this element and all descendants in document order."""
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def size(self) -> int:
        """Number of elements in this subtree, including itself."""
        return sum(1 for _ in self.iter_tree())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (
            self.identifying_attributes == other.identifying_attributes
            and dict(self.attributes) == dict(other.attributes)
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash(self.identifying_attributes)

    def __str__(self) -> str:
        return str(self.identifying_attributes)


def assert_acyclic(root: Element) -> None:
    """Raise ``AssertionError`` if an element is its own ancestor."""
    on_path: set[int] = set()
    stack: list[tuple[Element, bool]] = [(root, False)]
    while stack:
        element, leaving = stack.pop()
        marker = id(element)
        if leaving:
            on_path.discard(marker)
            continue
        if marker in on_path:
            msg = f"Cycle detected at element {element.path!r}"
            raise AssertionError(msg)
        on_path.add(marker)
        stack.append((element, True))
        stack.extend((child, False) for child in reversed(element.children))
