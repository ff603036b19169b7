"""Replay results: the difference report rolled up from check to suite.

- ``ActionReplayResult``: one check, i.e. one state comparison, with its
  differences, counters and filtered metadata difference.
- ``TestReplayResult``: the ordered checks of one test.
- ``SuiteReplayResult``: the ordered tests of one suite.

Test and suite counters are sums over their children and only ever grow.
``finalize()`` freezes a test or suite; adding to it afterwards raises
``RuntimeError``.

Example::

    suite = SuiteReplayResult("login")
    test = TestReplayResult("valid credentials")
    test.add_action(ActionReplayResult.from_comparison("after submit", result))
    suite.add_test(test)
    suite.finalize()
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from snapshot_diff.algorithm.differ import DiffCounters
from snapshot_diff.metadata import MetadataDifference

if TYPE_CHECKING:
    from snapshot_diff.differences import Difference
    from snapshot_diff.result import ComparisonResult

__all__ = ["ActionReplayResult", "SuiteReplayResult", "TestReplayResult"]


class ActionReplayResult:
    """The result of one check.

    Args:
        name:        Name of the check, e.g. the step that produced the state.
        differences: Top-level differences of the state comparison.
        counters:    Counters of the state comparison.
        metadata_difference: Metadata difference, already filtered.
    """

    __slots__ = ("_counters", "_differences", "_metadata_difference", "_name")

    def __init__(
        self,
        name: str,
        differences: Iterable[Difference] = (),
        counters: DiffCounters | None = None,
        metadata_difference: MetadataDifference | None = None,
    ) -> None:
        self._name = name
        self._differences = tuple(differences)
        self._counters = counters if counters is not None else DiffCounters()
        self._metadata_difference = (
            metadata_difference if metadata_difference is not None else MetadataDifference()
        )

    @classmethod
    def from_comparison(
        cls,
        name: str,
        result: ComparisonResult,
        metadata_difference: MetadataDifference | None = None,
    ) -> ActionReplayResult:
        return cls(
            name,
            result.differences,
            DiffCounters(
                differences=result.differences_count,
                deleted=result.deleted_count,
                created=result.created_count,
                maintained=result.maintained_count,
            ),
            metadata_difference,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def differences(self) -> tuple[Difference, ...]:
        return self._differences

    @property
    def metadata_difference(self) -> MetadataDifference:
        return self._metadata_difference

    @property
    def counters(self) -> DiffCounters:
        return self._counters

    @property
    def differences_count(self) -> int:
        return self._counters.differences

    @property
    def deleted_count(self) -> int:
        return self._counters.deleted

    @property
    def created_count(self) -> int:
        return self._counters.created

    @property
    def maintained_count(self) -> int:
        return self._counters.maintained

    def is_empty(self) -> bool:
        c = self._counters
        return c.differences == 0 and c.deleted == 0 and c.created == 0

    def __repr__(self) -> str:
        return f"ActionReplayResult(name={self._name!r}, counters={self._counters!r})"


class _Counted(Protocol):
    @property
    def counters(self) -> DiffCounters: ...

    def is_empty(self) -> bool: ...


_Child = TypeVar("_Child", bound=_Counted)


class _AggregateResult(Generic[_Child]):
    """Named, ordered collection of child results with summed counters."""

    __slots__ = ("_children", "_counters", "_finalized", "_name")

    def __init__(self, name: str, children: Iterable[_Child] = ()) -> None:
        self._name = name
        self._children: list[_Child] = []
        self._counters = DiffCounters()
        self._finalized = False
        for child in children:
            self._add(child)

    def _add(self, child: _Child) -> None:
        if self._finalized:
            msg = f"{type(self).__name__} '{self._name}' is finalized"
            raise RuntimeError(msg)
        self._children.append(child)
        self._counters = self._counters + child.counters

    def finalize(self) -> None:
        self._finalized = True

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def name(self) -> str:
        return self._name

    @property
    def counters(self) -> DiffCounters:
        return self._counters

    @property
    def differences_count(self) -> int:
        return self._counters.differences

    @property
    def deleted_count(self) -> int:
        return self._counters.deleted

    @property
    def created_count(self) -> int:
        return self._counters.created

    @property
    def maintained_count(self) -> int:
        return self._counters.maintained

    def is_empty(self) -> bool:
        c = self._counters
        if c.differences or c.deleted or c.created:
            return False
        return all(child.is_empty() for child in self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"children={len(self._children)}, counters={self._counters!r})"
        )


class TestReplayResult(_AggregateResult[ActionReplayResult]):
    """The checks of one test, in replay order."""

    __slots__ = ()
    # Not a test class, despite the name.
    __test__ = False

    def add_action(self, action: ActionReplayResult) -> None:
        self._add(action)

    @property
    def action_replay_results(self) -> tuple[ActionReplayResult, ...]:
        return tuple(self._children)


class SuiteReplayResult(_AggregateResult[TestReplayResult]):
    """The tests of one suite, in replay order."""

    __slots__ = ()

    def add_test(self, test: TestReplayResult) -> None:
        self._add(test)

    @property
    def test_replay_results(self) -> tuple[TestReplayResult, ...]:
        return tuple(self._children)
