"""
Structure matching and whole-document comparisons.

Usage:
    from jsonprobe.structure import StructureMatcher, is_subset

    doc = {"items": [{"id": 1}, {"id": 2, "name": "x"}]}

    StructureMatcher().validate(doc, {"items": {"*": ["id"]}})
    is_subset({"items": [{"id": 1}]}, doc)   # True
"""

from .matcher import StructureMatcher, assert_structure, has_structure

from .comparison import canonical_json, find_mismatch, fragments, is_subset

__all__ = [
    # Matcher
    "StructureMatcher",
    "assert_structure",
    "has_structure",
    # Comparisons
    "canonical_json",
    "find_mismatch",
    "fragments",
    "is_subset",
]
