"""Element paths and the two path-derived attributes.

An element path is rooted and made of ``name[suffix]`` segments, e.g.
``/html[1]/body[1]/div[3]``.  The suffix is the 1-based position of the
element among its same-named siblings.

``PathAttribute`` (key ``"path"``) carries the full path; ``SuffixAttribute``
(key ``"suffix"``) carries the suffix of the last segment.  Both match only
when equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from snapshot_diff.attributes.base import DEFAULT_WEIGHT, Attribute

__all__ = [
    "PATH_ATTRIBUTE_KEY",
    "SUFFIX_ATTRIBUTE_KEY",
    "ElementPath",
    "PathAttribute",
    "PathElement",
    "SuffixAttribute",
]

PATH_ATTRIBUTE_KEY = "path"
SUFFIX_ATTRIBUTE_KEY = "suffix"

_SEPARATOR = "/"
_SEGMENT = re.compile(r"^(?P<name>[^\[\]/]+)\[(?P<suffix>\d+)\]$")


@dataclass(frozen=True, slots=True)
class PathElement:
    """One ``name[suffix]`` segment of an element path."""

    name: str
    suffix: int = 1

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Path element name must not be empty."
            raise ValueError(msg)
        if _SEPARATOR in self.name or "[" in self.name or "]" in self.name:
            msg = f"Path element name contains a reserved character: {self.name!r}"
            raise ValueError(msg)
        if self.suffix < 1:
            msg = f"Path element suffix must be >= 1, got {self.suffix}"
            raise ValueError(msg)

    @classmethod
    def parse(cls, text: str) -> PathElement:
        match = _SEGMENT.match(text.strip())
        if match is None:
            msg = f"Malformed path element {text!r}, expected 'name[suffix]'"
            raise ValueError(msg)
        return cls(match.group("name"), int(match.group("suffix")))

    def __str__(self) -> str:
        return f"{self.name}[{self.suffix}]"


@dataclass(frozen=True, slots=True)
class ElementPath:
    """Rooted sequence of path elements."""

    elements: tuple[PathElement, ...]

    def __post_init__(self) -> None:
        if not self.elements:
            msg = "Element path must contain at least one element."
            raise ValueError(msg)
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def parse(cls, text: str) -> ElementPath:
        """Parse ``/a[1]/b[2]`` (the leading separator is optional).

        Raises:
            ValueError: On an empty path, an empty segment, or a segment that
                is not of the form ``name[suffix]``.
        """
        if text is None:
            msg = "Path must not be None."
            raise ValueError(msg)
        stripped = text.strip()
        if stripped.startswith(_SEPARATOR):
            stripped = stripped[1:]
        if not stripped:
            msg = f"Malformed path {text!r}: no elements"
            raise ValueError(msg)
        return cls(tuple(PathElement.parse(part) for part in stripped.split(_SEPARATOR)))

    @classmethod
    def of(cls, value: ElementPath | str) -> ElementPath:
        if isinstance(value, ElementPath):
            return value
        return cls.parse(value)

    @property
    def element(self) -> PathElement:
        """The last segment."""
        return self.elements[-1]

    @property
    def parent(self) -> ElementPath | None:
        """The path without its last segment, ``None`` for a root path."""
        if len(self.elements) == 1:
            return None
        return ElementPath(self.elements[:-1])

    def child(self, name: str, suffix: int = 1) -> ElementPath:
        return ElementPath((*self.elements, PathElement(name, suffix)))

    def __len__(self) -> int:
        return len(self.elements)

    def __str__(self) -> str:
        return _SEPARATOR + _SEPARATOR.join(str(e) for e in self.elements)


@dataclass(frozen=True, slots=True, init=False)
class PathAttribute(Attribute):
    """The ``path`` attribute; matches only an identical path."""

    value: ElementPath

    def __init__(self, value: ElementPath | str, weight: float = DEFAULT_WEIGHT) -> None:
        object.__setattr__(self, "key", PATH_ATTRIBUTE_KEY)
        object.__setattr__(self, "value", ElementPath.of(value))
        object.__setattr__(self, "weight", weight)
        Attribute.__post_init__(self)

    def _order_value(self) -> Any:
        return str(self.value)

    def apply_change(self, actual: Any) -> PathAttribute:
        return PathAttribute(actual, self.weight)


@dataclass(frozen=True, slots=True, init=False)
class SuffixAttribute(Attribute):
    """The ``suffix`` attribute derived from the last path segment."""

    value: int

    def __init__(self, value: int, weight: float = DEFAULT_WEIGHT) -> None:
        object.__setattr__(self, "key", SUFFIX_ATTRIBUTE_KEY)
        object.__setattr__(self, "value", int(value))
        object.__setattr__(self, "weight", weight)
        Attribute.__post_init__(self)

    def _order_value(self) -> Any:
        return self.value

    def apply_change(self, actual: Any) -> SuffixAttribute:
        return SuffixAttribute(actual, self.weight)
