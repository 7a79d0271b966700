"""
Dot-delimited key paths.

A key path such as "data.items.0.id" is split on the delimiter into
segments. Segments made of ASCII digits address sequence indexes when the
node being walked is a list, and plain keys when it is a mapping.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ..errors import MalformedPath

_INDEX_PATTERN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class KeyPath:
    """
    A parsed, immutable key path.

    Attributes:
        text: The original path string
        segments: The path split on the delimiter
        delimiter: Delimiter used to split the path
    """
    text: str
    segments: tuple[str, ...]
    delimiter: str = "."

    @classmethod
    def parse(cls, path: Any, delimiter: str = ".") -> KeyPath:
        """
        Parse a path string into segments.

        Raises:
            MalformedPath: If the path is not a string, is empty, or has an
                empty segment ("a..b", ".a", "a.")
        """
        if isinstance(path, KeyPath):
            if path.delimiter == delimiter:
                return path
            path = path.text

        if not isinstance(path, str):
            raise MalformedPath(path, f"path must be a string, got {type(path).__name__}")
        if path == "":
            raise MalformedPath(path)

        segments = tuple(path.split(delimiter))
        if "" in segments:
            raise MalformedPath(path, f"empty segment between '{delimiter}' delimiters")

        return cls(text=path, segments=segments, delimiter=delimiter)

    def __str__(self) -> str:
        return self.text

    def __len__(self) -> int:
        return len(self.segments)

    def prefix(self, length: int) -> str:
        """Return the first `length` segments joined back into a path string."""
        return self.delimiter.join(self.segments[:length])


def index_of(segment: str) -> int | None:
    """Return the sequence index a segment addresses, or None if not numeric."""
    if _INDEX_PATTERN.fullmatch(segment):
        return int(segment)
    return None


def join_location(location: str, segment: Any, delimiter: str = ".") -> str:
    """Append a segment to a dotted location string."""
    if not location:
        return str(segment)
    return f"{location}{delimiter}{segment}"
