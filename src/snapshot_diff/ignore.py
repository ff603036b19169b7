"""IgnoreRegistry: which attributes and elements a comparison leaves out.

The registry is consulted in three places:

- the weighted-average similarity strategy drops ignored keys from both the
  numerator and the unifying factor;
- the differ skips ignored attribute differences and ignored elements;
- the metadata difference filter drops ignored metadata keys (the capture
  timestamp keys are ignored out of the box).

A process-wide default registry backs callers that do not pass their own.
It is read-mostly: reconfigure it between comparisons, never during one.

Rules can be parsed from text lines::

    # comments and blank lines are skipped
    attribute=outline
    attribute-regex=^style\\..*
    type=Tooltip
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snapshot_diff.descriptors import IdentifyingAttributes
    from snapshot_diff.differences import AttributeDifference

__all__ = [
    "IGNORED_ATTRIBUTES_ENV",
    "TIME_METADATA_KEYS",
    "IgnoreRegistry",
    "get_default_registry",
    "set_default_registry",
]

logger = logging.getLogger(__name__)

IGNORED_ATTRIBUTES_ENV = "SNAPSHOT_DIFF_IGNORED_ATTRIBUTES"

TIME_DATE_KEY = "time.date"
TIME_KEY = "time.time"
TIME_OFFSET_KEY = "time.offset"
TIME_ZONE_KEY = "time.zone"
TIME_METADATA_KEYS: frozenset[str] = frozenset(
    {TIME_DATE_KEY, TIME_KEY, TIME_OFFSET_KEY, TIME_ZONE_KEY}
)

_ATTRIBUTE_RULE = "attribute"
_ATTRIBUTE_REGEX_RULE = "attribute-regex"
_TYPE_RULE = "type"
_COMMENT = "#"


class IgnoreRegistry:
    """Mutable set of ignore rules.

    Args:
        attributes: Attribute keys to ignore (exact, case-sensitive).
        patterns:   Regular expressions; a key is ignored when one matches it
            in full.
        types:      Simple element types (``"Tooltip"``) whose elements are
            ignored altogether.
    """

    def __init__(
        self,
        attributes: Iterable[str] = (),
        patterns: Iterable[str | re.Pattern[str]] = (),
        types: Iterable[str] = (),
    ) -> None:
        self._attributes: set[str] = set(attributes)
        self._patterns: list[re.Pattern[str]] = [re.compile(p) for p in patterns]
        self._types: set[str] = set(types)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def with_defaults(cls) -> IgnoreRegistry:
        """A registry ignoring the capture-time metadata keys."""
        return cls(attributes=TIME_METADATA_KEYS)

    @classmethod
    def from_rules(cls, lines: Iterable[str] | str) -> IgnoreRegistry:
        """Parse ignore rules, one ``kind=value`` per line.

        Raises:
            ValueError: On a line that is not a known rule, naming the line
                number.
        """
        registry = cls()
        registry.add_rules(lines)
        return registry

    @classmethod
    def from_environment(
        cls, environ: Mapping[str, str] | None = None
    ) -> IgnoreRegistry:
        """Defaults plus the comma-separated keys of ``SNAPSHOT_DIFF_IGNORED_ATTRIBUTES``."""
        env = os.environ if environ is None else environ
        registry = cls.with_defaults()
        for key in env.get(IGNORED_ATTRIBUTES_ENV, "").split(","):
            if key.strip():
                registry.ignore_attribute(key.strip())
        return registry

    def add_rules(self, lines: Iterable[str] | str) -> None:
        if isinstance(lines, str):
            lines = lines.splitlines()
        for number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line or line.startswith(_COMMENT):
                continue
            kind, sep, value = line.partition("=")
            kind = kind.strip()
            value = value.strip()
            if not sep or not value:
                msg = f"Invalid ignore rule on line {number}: {raw!r}"
                raise ValueError(msg)
            if kind == _ATTRIBUTE_RULE:
                self.ignore_attribute(value)
            elif kind == _ATTRIBUTE_REGEX_RULE:
                self.ignore_attribute_pattern(value)
            elif kind == _TYPE_RULE:
                self.ignore_type(value)
            else:
                msg = f"Unknown ignore rule {kind!r} on line {number}"
                raise ValueError(msg)
            logger.debug("Parsed ignore rule %s=%s", kind, value)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def ignore_attribute(self, key: str) -> None:
        self._attributes.add(key)

    def unignore_attribute(self, key: str) -> None:
        self._attributes.discard(key)

    def ignore_attribute_pattern(self, pattern: str | re.Pattern[str]) -> None:
        try:
            self._patterns.append(re.compile(pattern))
        except re.error as exc:
            msg = f"Invalid attribute pattern {pattern!r}: {exc}"
            raise ValueError(msg) from exc

    def ignore_type(self, simple_type: str) -> None:
        self._types.add(simple_type)

    def clear(self) -> None:
        self._attributes.clear()
        self._patterns.clear()
        self._types.clear()

    def snapshot(self) -> IgnoreRegistry:
        """Return an independent copy of the current rules."""
        return IgnoreRegistry(self._attributes, self._patterns, self._types)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def ignored_attributes(self) -> frozenset[str]:
        return frozenset(self._attributes)

    def should_ignore_attribute(self, key: str) -> bool:
        if key in self._attributes:
            return True
        return any(p.fullmatch(key) for p in self._patterns)

    def should_ignore_element(self, identifying: IdentifyingAttributes) -> bool:
        return identifying.simple_type in self._types

    def should_ignore_attribute_difference(
        self,
        identifying: IdentifyingAttributes,
        difference: AttributeDifference,
    ) -> bool:
        return self.should_ignore_element(identifying) or self.should_ignore_attribute(
            difference.key
        )

    def __repr__(self) -> str:
        return (
            f"IgnoreRegistry(attributes={sorted(self._attributes)!r}, "
            f"patterns={[p.pattern for p in self._patterns]!r}, "
            f"types={sorted(self._types)!r})"
        )


_default_registry: IgnoreRegistry | None = None


def get_default_registry() -> IgnoreRegistry:
    """Return the process-wide registry, creating it from the environment once."""
    global _default_registry
    if _default_registry is None:
        _default_registry = IgnoreRegistry.from_environment()
        logger.debug("Initialized default ignore registry: %r", _default_registry)
    return _default_registry


def set_default_registry(registry: IgnoreRegistry | None) -> None:
    """Replace the process-wide registry; ``None`` re-reads the environment on next use."""
    global _default_registry
    _default_registry = registry
