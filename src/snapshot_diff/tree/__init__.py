"""Tree subpackage for snapshot element trees.

Re-exports the public API for the tree module:
- Element: immutable UI element with identifying/state attributes and children
- SnapshotBuilder: converts nested mappings into Element trees
- assert_acyclic: guards the matcher against cyclic input
"""

from snapshot_diff.tree.builder import SnapshotBuilder
from snapshot_diff.tree.element import Element, assert_acyclic

__all__ = ["Element", "SnapshotBuilder", "assert_acyclic"]
