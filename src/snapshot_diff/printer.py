"""Line-oriented text rendering of replay results.

Each printer renders its own header line and delegates the children to the
next printer one tab deeper; child renderings are joined with ``\\n`` and
empty children are suppressed::

    Suite 'login' has 1 difference(s) (0 deleted, 0 created, 3 maintained) in 1 test(s):
    \tTest 'valid credentials' has 1 difference(s) in 1 state(s):
    \t\tafter submit resulted in:
    \t\t\tLabel [hi] at '/Window[1]/Label[1]':
    \t\t\t\ttext: expected="hi", actual="hello"
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from snapshot_diff.differences import (
    ChangeKind,
    ChildDifference,
    ElementDifference,
)

if TYPE_CHECKING:
    from snapshot_diff.differences import AttributeDifference, Difference
    from snapshot_diff.metadata import MetadataDifference
    from snapshot_diff.report import ActionReplayResult, SuiteReplayResult, TestReplayResult

__all__ = [
    "ActionReplayResultPrinter",
    "ElementDifferencePrinter",
    "SuiteReplayResultPrinter",
    "TestReplayResultPrinter",
]

_CHILD_INDENT = "\t"


def _format_value(value: Any) -> str:
    return f'"{value}"'


def _format_attribute_difference(difference: AttributeDifference) -> str:
    return (
        f"{difference.key}: expected={_format_value(difference.expected)}, "
        f"actual={_format_value(difference.actual)}"
    )


class ElementDifferencePrinter:
    """Renders the changed elements of a difference tree, one block each."""

    def to_string(self, difference: Difference, indent: str = "") -> str:
        return "\n".join(self._blocks(difference, indent))

    def _blocks(self, difference: Difference, indent: str) -> list[str]:
        if isinstance(difference, ChildDifference):
            return [self._child_block(difference, indent)]

        blocks: list[str] = []
        if difference.attribute_differences:
            lines = [self._header(difference, indent)]
            lines.extend(
                indent + _CHILD_INDENT + _format_attribute_difference(d)
                for d in difference.attribute_differences
            )
            blocks.append("\n".join(lines))
        blocks.extend(self._child_block(d, indent) for d in difference.child_differences)
        for child in difference.children:
            blocks.extend(self._blocks(child, indent))
        return blocks

    @staticmethod
    def _header(difference: ElementDifference | ChildDifference, indent: str) -> str:
        identifying = difference.identifying_attributes
        return f"{indent}{identifying} at '{identifying.path}':"

    def _child_block(self, difference: ChildDifference, indent: str) -> str:
        verb = "was inserted" if difference.kind is ChangeKind.INSERTED else "was deleted"
        return f"{self._header(difference, indent)}\n{indent}{_CHILD_INDENT}{verb}"


class ActionReplayResultPrinter:
    """Renders one check: its metadata differences, then its element differences."""

    def __init__(self) -> None:
        self._delegate = ElementDifferencePrinter()

    def to_string(self, result: ActionReplayResult, indent: str = "") -> str:
        return f"{indent}{result.name} resulted in:\n" + self._body(result, indent + _CHILD_INDENT)

    def _body(self, result: ActionReplayResult, indent: str) -> str:
        parts: list[str] = []
        if not result.metadata_difference.is_empty():
            parts.append(self._metadata(result.metadata_difference, indent))
        parts.extend(self._delegate.to_string(d, indent) for d in result.differences)
        return "\n".join(p for p in parts if p)

    @staticmethod
    def _metadata(difference: MetadataDifference, indent: str) -> str:
        lines = [f"{indent}Metadata Differences:"]
        lines.extend(
            f"{indent}{_CHILD_INDENT}{d.key}: expected={_format_value(d.expected)}, "
            f"actual={_format_value(d.actual)}"
            for d in difference
        )
        return "\n".join(lines)


class TestReplayResultPrinter:
    """Renders one test and its non-empty checks."""

    # Not a test class, despite the name.
    __test__ = False

    def __init__(self) -> None:
        self._delegate = ActionReplayResultPrinter()

    def to_string(self, result: TestReplayResult, indent: str = "") -> str:
        header = (
            f"Test '{result.name}' has {result.differences_count} difference(s) "
            f"in {len(result.action_replay_results)} state(s):"
        )
        body = "\n".join(
            self._delegate.to_string(action, indent + _CHILD_INDENT)
            for action in result.action_replay_results
            if not action.is_empty()
        )
        return f"{indent}{header}\n{body}"


class SuiteReplayResultPrinter:
    """Renders one suite and its non-empty tests."""

    def __init__(self) -> None:
        self._delegate = TestReplayResultPrinter()

    def to_string(self, result: SuiteReplayResult, indent: str = "") -> str:
        header = (
            f"Suite '{result.name}' has {result.differences_count} difference(s) "
            f"({result.deleted_count} deleted, {result.created_count} created, "
            f"{result.maintained_count} maintained) "
            f"in {len(result.test_replay_results)} test(s):"
        )
        body = "\n".join(
            self._delegate.to_string(test, indent + _CHILD_INDENT)
            for test in result.test_replay_results
            if not test.is_empty()
        )
        return f"{indent}{header}\n{body}"
