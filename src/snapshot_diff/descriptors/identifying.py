"""IdentifyingAttributes: the attribute bag used to recognize an element.

Every element carries the three mandatory attributes ``path``, ``type`` and
``suffix`` (derived from the last path segment) plus any of the recognized
optional ones (``name``, ``text``, ``codeLoc``, ``x``, ``y``, ``height``,
``width``, ``context``, ``outline``, ``id``).  Attributes are kept and
iterated in lexicographic key order.

Instances are immutable and hashable; ``apply_changes`` returns a new
instance.  The ``identifier`` is the SHA-256 hex digest of
``"parentPath # type # suffix"``, which is stable across runs.
"""

from __future__ import annotations

import hashlib
from collections.abc import Collection, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from snapshot_diff.algorithm import strategies
from snapshot_diff.attributes import (
    COMPARE_EQUAL,
    Attribute,
    ElementPath,
    OutlineAttribute,
    PathAttribute,
    Rectangle,
    StringAttribute,
    SuffixAttribute,
)
from snapshot_diff.attributes.path import PATH_ATTRIBUTE_KEY, SUFFIX_ATTRIBUTE_KEY

if TYPE_CHECKING:
    from snapshot_diff.algorithm.config import DiffConfig
    from snapshot_diff.differences import AttributeDifference
    from snapshot_diff.protocols import IgnorePolicy

__all__ = [
    "IDENTIFYING_ATTRIBUTE_KEYS",
    "PERFECT_SIMILARITY",
    "TYPE_ATTRIBUTE_KEY",
    "IdentifyingAttributes",
]

TYPE_ATTRIBUTE_KEY = "type"

# "suffix" is implicitly contained via "path"
IDENTIFYING_ATTRIBUTE_KEYS: tuple[str, ...] = (
    PATH_ATTRIBUTE_KEY,
    TYPE_ATTRIBUTE_KEY,
    "name",
    "text",
    "codeLoc",
    "x",
    "y",
    "height",
    "width",
    "context",
    "outline",
    "id",
)

# Sum of the default weights of the three mandatory attributes.
PERFECT_SIMILARITY = 3.0

_FULL_STRING_SEPARATOR = " # "


class IdentifyingAttributes:
    """Immutable, key-ordered bag of identifying attributes.

    Example::

        ids = IdentifyingAttributes.create("/html[1]/button[2]", "javax.swing.JButton")
        ids.simple_type        # "JButton"
        ids.parent_path        # "/html[1]"
        ids.to_full_string()   # "/html[1] # javax.swing.JButton # 2"
    """

    __slots__ = ("_attributes", "_hash", "_parent_path")

    def __init__(self, attributes: Iterable[Attribute]) -> None:
        by_key = {a.key: a for a in attributes}
        if PATH_ATTRIBUTE_KEY not in by_key or TYPE_ATTRIBUTE_KEY not in by_key:
            msg = "Identifying attributes require both 'path' and 'type'."
            raise ValueError(msg)
        self._attributes: dict[str, Attribute] = dict(sorted(by_key.items()))
        self._hash: int | None = None
        self._parent_path: str | None = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @staticmethod
    def create_list(path: ElementPath | str, type_: str | None) -> list[Attribute]:
        """Return the mandatory ``path``, ``type`` and ``suffix`` attributes.

        Raises:
            ValueError: If ``type_`` is None or blank, or ``path`` is malformed.
        """
        if type_ is None:
            msg = "Type must not be null."
            raise ValueError(msg)
        type_ = type_.strip()
        if not type_:
            msg = "Type must not be empty."
            raise ValueError(msg)
        element_path = ElementPath.of(path)
        return [
            PathAttribute(element_path),
            StringAttribute(TYPE_ATTRIBUTE_KEY, type_),
            SuffixAttribute(element_path.element.suffix),
        ]

    @classmethod
    def create(
        cls, path: ElementPath | str, type_: str | None, *extra: Attribute
    ) -> IdentifyingAttributes:
        """Build identifying attributes from a path, a type and optional extras."""
        return cls([*cls.create_list(path, type_), *extra])

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        attribute = self._attributes.get(key)
        if attribute is None:
            return None
        return attribute.value

    def get_attribute(self, key: str) -> Attribute | None:
        return self._attributes.get(key)

    @property
    def attributes(self) -> tuple[Attribute, ...]:
        """All attributes in key order."""
        return tuple(self._attributes.values())

    def keys(self) -> tuple[str, ...]:
        return tuple(self._attributes)

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attributes.values())

    def __len__(self) -> int:
        return len(self._attributes)

    @property
    def type(self) -> str:
        return self.get(TYPE_ATTRIBUTE_KEY)

    @property
    def simple_type(self) -> str:
        return self.type.rsplit(".", 1)[-1]

    @property
    def path_typed(self) -> ElementPath:
        return self.get(PATH_ATTRIBUTE_KEY)

    @property
    def path(self) -> str:
        return str(self.path_typed)

    @property
    def parent_path(self) -> str:
        """Path without its last segment; empty string for a root element."""
        if self._parent_path is None:
            parent = self.path_typed.parent
            self._parent_path = "" if parent is None else str(parent)
        return self._parent_path

    @property
    def suffix(self) -> int | None:
        return self.get(SUFFIX_ATTRIBUTE_KEY)

    @property
    def context(self) -> str | None:
        return self.get("context")

    @property
    def outline(self) -> OutlineAttribute | None:
        attribute = self.get_attribute("outline")
        return attribute if isinstance(attribute, OutlineAttribute) else None

    @property
    def outline_rectangle(self) -> Rectangle | None:
        outline = self.outline
        return None if outline is None else outline.value

    @staticmethod
    def is_identifying_attribute(key: str) -> bool:
        return key in IDENTIFYING_ATTRIBUTE_KEYS

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def to_full_string(self) -> str:
        values = (self.parent_path, self.type, self.suffix)
        return _FULL_STRING_SEPARATOR.join(str(v) for v in values if v is not None)

    def identifier(self) -> str:
        """SHA-256 lowercase hex digest of ``to_full_string()``."""
        return hashlib.sha256(self.to_full_string().encode("utf-8")).hexdigest()

    def compare_to(self, other: IdentifyingAttributes) -> int:
        """Total order walking all keys of both sides in lexicographic order.

        A key missing on one side orders that side first.
        """
        for key in sorted(self._attributes.keys() | other._attributes.keys()):
            result = _compare_attributes(self.get_attribute(key), other.get_attribute(key))
            if result != COMPARE_EQUAL:
                return result
        return COMPARE_EQUAL

    def match(
        self,
        other: IdentifyingAttributes,
        config: DiffConfig | None = None,
        ignore: IgnorePolicy | None = None,
    ) -> float:
        """Similarity to ``other`` in [0, 1] under the configured strategy."""
        return strategies.score(self, other, config, ignore)

    def apply_changes(
        self, differences: Collection[AttributeDifference]
    ) -> IdentifyingAttributes:
        """Return a new instance with the differences applied.

        An empty collection returns ``self`` unchanged.
        """
        if not differences:
            return self
        attributes = dict(self._attributes)
        for difference in differences:
            attributes[difference.key] = difference.apply_change_to(
                attributes.get(difference.key)
            )
        changed = {d.key for d in differences}
        if PATH_ATTRIBUTE_KEY in changed and SUFFIX_ATTRIBUTE_KEY not in changed:
            # keep the suffix in step with a changed path unless set explicitly
            path = attributes[PATH_ATTRIBUTE_KEY].value
            suffix = attributes.get(SUFFIX_ATTRIBUTE_KEY)
            weight = suffix.weight if suffix is not None else 1.0
            attributes[SUFFIX_ATTRIBUTE_KEY] = SuffixAttribute(path.element.suffix, weight)
        return type(self)(attributes.values())

    # ------------------------------------------------------------------
    # Dunder protocol
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentifyingAttributes):
            return NotImplemented
        return self._attributes == other._attributes

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(tuple(self._attributes.values()))
        return self._hash

    def __lt__(self, other: IdentifyingAttributes) -> bool:
        return self.compare_to(other) < 0

    def __str__(self) -> str:
        result = self.simple_type
        text = self.get("text")
        if text is not None:
            result += f" [{text}]"
        return result

    def __repr__(self) -> str:
        return f"IdentifyingAttributes({list(self._attributes.values())!r})"


def _compare_attributes(left: Attribute | None, right: Attribute | None) -> int:
    if left is None and right is None:
        return COMPARE_EQUAL
    if left is None:
        return -1
    return left.compare_to(right)
