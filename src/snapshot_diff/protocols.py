"""IgnorePolicy Protocol: the extension point for ignore rules.

Any object with a conformant ``should_ignore_attribute`` method can be passed
wherever the comparator, the strategies or the metadata filter expect the
ignore registry.  No inheritance is required.

Example::

    from snapshot_diff.protocols import IgnorePolicy

    class IgnoreNothing:
        def should_ignore_attribute(self, key: str) -> bool:
            return False

    assert isinstance(IgnoreNothing(), IgnorePolicy)  # structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IgnorePolicy(Protocol):
    """Structural protocol for ignore policies.

    ``should_ignore_attribute(key)`` returns True when the attribute ``key``
    must be left out of identification scores and difference reports.
    Policies may additionally implement ``should_ignore_element(identifying)``
    and ``should_ignore_attribute_difference(identifying, difference)``; the
    differ falls back to the key check when they are absent.
    """

    def should_ignore_attribute(self, key: str) -> bool: ...
