"""
Structure matching for decoded JSON documents.

A structure is a nested dict (or list) that mirrors the expected shape of
a document:

    {
        "data": {
            "*": ["id", "name"],   # every element of data has id and name
        },
        "meta": ["total"],         # meta has a total key
    }

Matching is a subset check: keys present in the document but absent from
the structure are ignored.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from ..accessor.path import index_of, join_location
from ..errors import MissingKey, ShapeMismatch, StructureError, kind_of
from ..formatting import Formatter, format_document


class StructureMatcher:
    """
    Validates documents against structure descriptions.

    Rules, applied depth-first to each (key, value) pair of the structure:
    - key is the wildcard and value is nested: the node must be a list and
      every element must match the nested structure
    - value is nested (dict or list): the node must have the key, and the
      child under that key must match the nested structure
    - value is a plain token: the node must have that token as a key

    Example:
        matcher = StructureMatcher()
        doc = {"items": [{"id": 1}, {"id": 2}]}

        matcher.matches(doc, {"items": {"*": ["id"]}})    # True
        matcher.validate(doc, {"items": {"*": ["name"]}}) # raises MissingKey
    """

    def __init__(
        self,
        wildcard: str = "*",
        formatter: Formatter | None = None,
        delimiter: str = ".",
    ):
        self.wildcard = wildcard
        self.formatter = formatter or format_document
        self.delimiter = delimiter

    def validate(self, document: Any, structure: Any) -> None:
        """
        Assert that the document has the given structure.

        Raises:
            MissingKey: A required key is absent
            ShapeMismatch: A node is not the kind the structure requires
        """
        self._validate(document, structure, "")

    def matches(self, document: Any, structure: Any) -> bool:
        """Return True if the document has the given structure."""
        try:
            self.validate(document, structure)
        except StructureError:
            return False
        return True

    def _validate(self, node: Any, structure: Any, location: str) -> None:
        for key, expected in self._pairs(structure):
            if key == self.wildcard and self._is_nested(expected):
                if not isinstance(node, list):
                    raise ShapeMismatch("array", kind_of(node), location)
                for index, item in enumerate(node):
                    self._validate(item, expected, self._join(location, index))

            elif self._is_nested(expected):
                child = self._require(node, key, location)
                self._validate(child, expected, self._join(location, key))

            else:
                self._require(node, expected, location)

    def _pairs(self, structure: Any) -> Iterator[tuple[Any, Any]]:
        """Yield (key, value) pairs of a structure node in its own order."""
        if isinstance(structure, dict):
            yield from structure.items()
        elif isinstance(structure, (list, tuple)):
            for index, item in enumerate(structure):
                if isinstance(item, dict):
                    yield from item.items()
                else:
                    yield index, item
        elif structure is not None:
            raise TypeError(
                f"Structure must be a dict or a list, got {type(structure).__name__}"
            )

    def _require(self, node: Any, key: Any, location: str) -> Any:
        """Return the child of node under key, raising if it is absent."""
        if isinstance(node, dict):
            if key in node:
                return node[key]
        elif isinstance(node, list):
            index = index_of(str(key)) if isinstance(key, (str, int)) else None
            if index is not None and index < len(node):
                return node[index]
        else:
            raise ShapeMismatch("object", kind_of(node), location)

        raise MissingKey(key, node, location, self.formatter(node))

    def _is_nested(self, value: Any) -> bool:
        return isinstance(value, (dict, list, tuple))

    def _join(self, location: str, segment: Any) -> str:
        return join_location(location, segment, self.delimiter)


def assert_structure(document: Any, structure: Any) -> None:
    """Raise a StructureError if the document does not have the structure."""
    StructureMatcher().validate(document, structure)


def has_structure(document: Any, structure: Any) -> bool:
    """Check if the document has the given structure."""
    return StructureMatcher().matches(document, structure)
