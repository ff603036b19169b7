"""Descriptors subpackage: how an element is recognized across snapshots."""

from snapshot_diff.descriptors.identifying import (
    IDENTIFYING_ATTRIBUTE_KEYS,
    PERFECT_SIMILARITY,
    TYPE_ATTRIBUTE_KEY,
    IdentifyingAttributes,
)

__all__ = [
    "IDENTIFYING_ATTRIBUTE_KEYS",
    "PERFECT_SIMILARITY",
    "TYPE_ATTRIBUTE_KEY",
    "IdentifyingAttributes",
]
