"""Metadata differences and their filter.

Every snapshot carries a flat metadata mapping (capture time, browser,
operating system, ...).  ``MetadataDifference.between`` collects the keys
whose values changed; ``MetadataDifferenceFilter`` drops the keys the ignore
policy names, which by default are the capture-time keys that differ on
every run.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from snapshot_diff.attributes.base import value_hash
from snapshot_diff.ignore import get_default_registry

if TYPE_CHECKING:
    from snapshot_diff.protocols import IgnorePolicy

__all__ = ["MetadataDifference", "MetadataDifferenceFilter", "MetadataElementDifference"]


@dataclass(frozen=True, slots=True)
class MetadataElementDifference:
    """One metadata key whose value changed."""

    key: str
    expected: Any
    actual: Any

    def __hash__(self) -> int:
        return hash((self.key, value_hash(self.expected), value_hash(self.actual)))


class MetadataDifference:
    """An immutable set of ``MetadataElementDifference`` entries.

    Iteration yields the entries sorted by key.
    """

    __slots__ = ("_differences",)

    def __init__(self, differences: Iterable[MetadataElementDifference] = ()) -> None:
        self._differences = frozenset(differences)

    @classmethod
    def of(cls, differences: Iterable[MetadataElementDifference]) -> MetadataDifference:
        return cls(differences)

    @classmethod
    def empty(cls) -> MetadataDifference:
        return cls()

    @classmethod
    def between(
        cls, expected: Mapping[str, Any], actual: Mapping[str, Any]
    ) -> MetadataDifference:
        """Differences between two metadata mappings; a missing key reads as ``None``."""
        return cls(
            MetadataElementDifference(key, expected.get(key), actual.get(key))
            for key in set(expected) | set(actual)
            if expected.get(key) != actual.get(key)
        )

    @property
    def differences(self) -> frozenset[MetadataElementDifference]:
        return self._differences

    def keys(self) -> frozenset[str]:
        return frozenset(d.key for d in self._differences)

    def is_empty(self) -> bool:
        return not self._differences

    def __iter__(self) -> Iterator[MetadataElementDifference]:
        return iter(sorted(self._differences, key=lambda d: d.key))

    def __len__(self) -> int:
        return len(self._differences)

    def __contains__(self, item: object) -> bool:
        return item in self._differences

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataDifference):
            return NotImplemented
        return self._differences == other._differences

    def __hash__(self) -> int:
        return hash(self._differences)

    def __repr__(self) -> str:
        return f"MetadataDifference({list(self)!r})"


class MetadataDifferenceFilter:
    """Drops metadata differences whose key the ignore policy ignores.

    Args:
        ignore: Ignore policy; the process-wide registry when omitted.
    """

    def __init__(self, ignore: IgnorePolicy | None = None) -> None:
        self._ignore = ignore

    def filter(self, difference: MetadataDifference) -> MetadataDifference:
        ignore = self._ignore if self._ignore is not None else get_default_registry()
        return MetadataDifference(
            d for d in difference.differences if not ignore.should_ignore_attribute(d.key)
        )
