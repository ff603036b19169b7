"""Attribute subpackage: the typed, weighted, comparable attribute values.

Re-exports the public API:
- Attribute and its variants (string, numeric, enum, object, path, suffix, outline)
- ElementPath / PathElement: rooted element paths
- Rectangle: outline geometry
- attribute_for: picks the variant for a raw value
"""

from snapshot_diff.attributes.base import (
    COMPARE_EQUAL,
    Attribute,
    EnumAttribute,
    NumericAttribute,
    ObjectAttribute,
    StringAttribute,
)
from snapshot_diff.attributes.factory import attribute_for
from snapshot_diff.attributes.outline import OutlineAttribute, Rectangle
from snapshot_diff.attributes.path import (
    ElementPath,
    PathAttribute,
    PathElement,
    SuffixAttribute,
)

__all__ = [
    "COMPARE_EQUAL",
    "Attribute",
    "ElementPath",
    "EnumAttribute",
    "NumericAttribute",
    "ObjectAttribute",
    "OutlineAttribute",
    "PathAttribute",
    "PathElement",
    "Rectangle",
    "StringAttribute",
    "SuffixAttribute",
    "attribute_for",
]
