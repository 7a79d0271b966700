"""
Key-path access to decoded JSON documents.

Usage:
    from jsonprobe.accessor import PathAccessor, get_path

    doc = {"data": {"items": [{"id": 1}, {"id": 2}]}}

    get_path(doc, "data.items.1.id")         # 2

    accessor = PathAccessor()
    doc = accessor.set(doc, "data.count", 2)
    doc = accessor.forget(doc, "data.items.0")
    accessor.only(doc, ["data.count"])       # {"data": {"count": 2}}
"""

from .path import KeyPath, index_of, join_location

from .accessor import (
    PathAccessor,
    # Convenience functions
    has_path,
    get_path,
    set_path,
    forget_path,
    only_paths,
)

__all__ = [
    # Paths
    "KeyPath",
    "index_of",
    "join_location",
    # Accessor
    "PathAccessor",
    # Convenience functions
    "has_path",
    "get_path",
    "set_path",
    "forget_path",
    "only_paths",
]
