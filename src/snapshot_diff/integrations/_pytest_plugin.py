"""pytest plugin for snapshot-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from snapshot_diff.api import compare
from snapshot_diff.printer import ActionReplayResultPrinter
from snapshot_diff.report import ActionReplayResult

if TYPE_CHECKING:
    from snapshot_diff.algorithm.config import DiffConfig
    from snapshot_diff.protocols import IgnorePolicy


@pytest.fixture(scope="session")
def assert_states_match() -> Any:
    """Fixture that returns a callable UI state asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh StateComparator per call).

    Usage in tests::

        def test_label(assert_states_match):
            assert_states_match(
                {"type": "a.Label", "identifying": {"text": "hi"}},
                {"type": "a.Label", "identifying": {"text": "hi"}},
            )

    Returns:
        A callable ``_assert(actual, expected, config=None, ignore=None) -> None``
        that raises ``AssertionError`` when the trees differ.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: DiffConfig | None = None,
        ignore: IgnorePolicy | None = None,
    ) -> None:
        """Assert that two element trees have no difference.

        Args:
            actual:   The actual tree produced by the code under test.
            expected: The expected/reference tree.
            config:   Optional DiffConfig for custom matching parameters.
            ignore:   Optional ignore policy.

        Raises:
            AssertionError: When the comparison finds a difference, deletion or
                insertion, with the counters and the printed differences.
        """
        result = compare(expected, actual, config=config, ignore=ignore)
        if not result.is_empty():
            rendered = ActionReplayResultPrinter().to_string(
                ActionReplayResult.from_comparison("comparison", result), "  "
            )
            raise AssertionError(
                f"UI states differ: "
                f"{result.differences_count} difference(s) "
                f"({result.deleted_count} deleted, {result.created_count} created, "
                f"{result.maintained_count} maintained)\n"
                f"{rendered}"
            )

    return _assert
