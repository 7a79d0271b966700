"""
Path accessor for decoded JSON documents.

This module provides read, write and delete operations on a nested tree of
dicts, lists and scalars, addressed by dot-delimited key paths.

Writes are copy-on-write: set() and forget() never modify the document they
are given. Containers along the path are shallow-copied and the new root is
returned, while untouched subtrees are shared with the original.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from ..errors import IndexOutOfRange, MalformedPath
from .path import KeyPath, index_of

logger = logging.getLogger(__name__)

# Returned internally when a path does not resolve
_MISSING = object()


class PathAccessor:
    """
    Reads and writes values inside a document by key path.

    Example:
        accessor = PathAccessor()
        doc = {"data": {"foo": "bar"}}

        accessor.get(doc, "data.foo")            # "bar"
        accessor.has(doc, "data.missing")        # False
        doc = accessor.set(doc, "data.foo", "baz")
        doc = accessor.forget(doc, "data.foo")   # {"data": {}}
    """

    def __init__(self, delimiter: str = "."):
        if not delimiter:
            raise ValueError("delimiter must be a non-empty string")
        self.delimiter = delimiter

    def parse(self, path: str | KeyPath) -> KeyPath:
        return KeyPath.parse(path, self.delimiter)

    def has(self, document: Any, path: str | KeyPath) -> bool:
        """
        Check whether every segment of a path resolves.

        A path ending at a None value still counts as present.
        """
        return self._resolve(document, self.parse(path)) is not _MISSING

    def get(self, document: Any, path: str | KeyPath, default: Any = None) -> Any:
        """
        Get the value at a path.

        Args:
            document: The document to read
            path: Dot-delimited key path
            default: Value returned when the path does not resolve. A callable
                default is called to produce the value.

        Returns:
            The value at the path (any node kind), or the default
        """
        value = self._resolve(document, self.parse(path))
        if value is _MISSING:
            return default() if callable(default) else default
        return value

    def set(self, document: Any, path: str | KeyPath, value: Any) -> Any:
        """
        Assign a value at a path and return the updated root.

        Missing intermediate segments are created as empty dicts. A scalar
        found in an intermediate position is replaced by an empty dict. On a
        list, an index equal to its length appends.

        Raises:
            MalformedPath: If the path is invalid, or a non-numeric segment
                is applied to a list
            IndexOutOfRange: If an index is more than one past the end of a list
        """
        key_path = self.parse(path)
        updated = self._assign(document, key_path, 0, value)
        logger.debug(f"Set value at '{key_path}'")
        return updated

    def forget(self, document: Any, path: str | KeyPath) -> Any:
        """
        Remove the value at a path and return the updated root.

        If any segment is missing the document is returned unchanged (the
        same object). Sibling keys keep their order.

        Removing the last element of a list shortens the list. Removing any
        other element turns the list into a dict keyed by the remaining
        indexes, so the removed index stays absent:

            forget({"a": [1, 2, 3]}, "a.0")   # {"a": {"1": 2, "2": 3}}
            forget({"a": [1, 2, 3]}, "a.2")   # {"a": [1, 2]}
        """
        key_path = self.parse(path)
        updated = self._remove(document, key_path, 0)
        if updated is document:
            logger.debug(f"Nothing to forget at '{key_path}'")
        else:
            logger.debug(f"Forgot value at '{key_path}'")
        return updated

    def only(self, document: Any, paths: Iterable[str | KeyPath]) -> dict[str, Any]:
        """
        Project a document onto a set of paths.

        Each path that resolves is copied into a new dict at the same nested
        position. Paths that do not resolve are left out.

        Positions are rebuilt with set(), which never creates lists, so list
        indexes come back as dict keys:

            only({"data": [{"id": 1, "name": "a"}]}, ["data.0.id"])
            # {"data": {"0": {"id": 1}}}
        """
        if isinstance(paths, (str, KeyPath)):
            paths = [paths]

        projected: dict[str, Any] = {}
        for path in paths:
            key_path = self.parse(path)
            value = self._resolve(document, key_path)
            if value is not _MISSING:
                projected = self._assign(projected, key_path, 0, copy.deepcopy(value))
        return projected

    def _resolve(self, node: Any, key_path: KeyPath) -> Any:
        """Walk the path and return the value found, or _MISSING."""
        for segment in key_path.segments:
            if isinstance(node, dict):
                if segment not in node:
                    return _MISSING
                node = node[segment]
            elif isinstance(node, list):
                index = index_of(segment)
                if index is None or index >= len(node):
                    return _MISSING
                node = node[index]
            else:
                return _MISSING
        return node

    def _assign(self, node: Any, key_path: KeyPath, depth: int, value: Any) -> Any:
        segment = key_path.segments[depth]
        last = depth == len(key_path) - 1

        if isinstance(node, list):
            index = index_of(segment)
            if index is None:
                raise MalformedPath(
                    key_path.text,
                    f"segment '{segment}' cannot address a list at '{key_path.prefix(depth) or '<root>'}'",
                )
            if index > len(node):
                raise IndexOutOfRange(key_path.text, index, len(node))

            updated = list(node)
            if index == len(node):
                updated.append(value if last else self._assign({}, key_path, depth + 1, value))
            else:
                updated[index] = value if last else self._assign(node[index], key_path, depth + 1, value)
            return updated

        updated = dict(node) if isinstance(node, dict) else {}
        if last:
            updated[segment] = value
        else:
            updated[segment] = self._assign(updated.get(segment), key_path, depth + 1, value)
        return updated

    def _remove(self, node: Any, key_path: KeyPath, depth: int) -> Any:
        segment = key_path.segments[depth]
        last = depth == len(key_path) - 1

        if isinstance(node, dict):
            if segment not in node:
                return node
            key: Any = segment
            updated: Any = dict(node)
        elif isinstance(node, list):
            key = index_of(segment)
            if key is None or key >= len(node):
                return node
            updated = list(node)
        else:
            return node

        if last:
            if isinstance(node, list) and key < len(node) - 1:
                # Later elements keep their indexes as mapping keys
                return {str(index): item for index, item in enumerate(node) if index != key}
            del updated[key]
            return updated

        child = node[key]
        new_child = self._remove(child, key_path, depth + 1)
        if new_child is child:
            return node
        updated[key] = new_child
        return updated


# Convenience functions using a default accessor
_default_accessor = PathAccessor()


def has_path(document: Any, path: str) -> bool:
    """Check if a key path exists in the document."""
    return _default_accessor.has(document, path)


def get_path(document: Any, path: str, default: Any = None) -> Any:
    """Get the value at a key path, or the default."""
    return _default_accessor.get(document, path, default)


def set_path(document: Any, path: str, value: Any) -> Any:
    """Return a copy of the document with the value set at a key path."""
    return _default_accessor.set(document, path, value)


def forget_path(document: Any, path: str) -> Any:
    """Return a copy of the document without the value at a key path."""
    return _default_accessor.forget(document, path)


def only_paths(document: Any, paths: Iterable[str]) -> dict[str, Any]:
    """Project the document onto the given key paths."""
    return _default_accessor.only(document, paths)
