"""Shared fixtures: every test starts from pristine process-wide defaults.

The similarity strategy selector and the default ignore registry are
process-wide and lazily initialized from the environment.  Tests that set the
environment must see it re-read, and must not leak their settings into other
tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from snapshot_diff.algorithm.strategies import FAIRLY_SIMILAR_INSTANCE_ENV, reset_default_strategy
from snapshot_diff.ignore import IGNORED_ATTRIBUTES_ENV, set_default_registry


@pytest.fixture(autouse=True)
def _pristine_defaults(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(FAIRLY_SIMILAR_INSTANCE_ENV, raising=False)
    monkeypatch.delenv(IGNORED_ATTRIBUTES_ENV, raising=False)
    reset_default_strategy()
    set_default_registry(None)
    yield
    reset_default_strategy()
    set_default_registry(None)
