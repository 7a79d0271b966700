"""
Exception types raised by the path accessor, the structure matcher and the
fixture assertions.

Path problems (MalformedPath, IndexOutOfRange) are ordinary value errors
raised at the call site. Structure failures and AssertionFailed subclass
AssertionError so they surface as regular test failures under pytest.
"""

from __future__ import annotations

import copy
from typing import Any


class JsonProbeError(Exception):
    """Base exception for all jsonprobe errors."""

    pass


class MalformedPath(JsonProbeError, ValueError):
    """Raised when a path string is empty or cannot be split into segments."""

    def __init__(self, path: Any, reason: str = "path must not be empty"):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed path {path!r}: {reason}")


class IndexOutOfRange(JsonProbeError, IndexError):
    """Raised when set() would leave a gap in a sequence."""

    def __init__(self, path: str, index: int, length: int):
        self.path = path
        self.index = index
        self.length = length
        super().__init__(
            f"Cannot set index {index} on a sequence of length {length} "
            f"(path '{path}'); only indexes up to {length} are allowed"
        )


class StructureError(JsonProbeError, AssertionError):
    """
    Base class for structure validation failures.

    Attributes:
        location: Dotted location of the node being inspected ("" for the root)
    """

    def __init__(self, message: str, location: str = ""):
        self.location = location
        self.message = message
        where = f" at '{location}'" if location else ""
        super().__init__(f"{message}{where}")


class MissingKey(StructureError):
    """
    A required key is absent from the inspected node.

    Attributes:
        key: The missing key
        node: Snapshot of the node that was inspected
    """

    def __init__(
        self,
        key: Any,
        node: Any,
        location: str = "",
        formatted: str | None = None,
    ):
        self.key = key
        self.node = copy.deepcopy(node)
        if formatted is None:
            formatted = repr(node)
        super().__init__(
            f"Could not find key [{key}] within data subset: {formatted}",
            location,
        )


class ShapeMismatch(StructureError):
    """
    The inspected node is not of the kind the structure requires.

    Attributes:
        expected: Expected node kind ("array" or "object")
        actual: Kind that was found
    """

    def __init__(self, expected: str, actual: str, location: str = ""):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected}, got {actual}", location)


class AssertionFailed(JsonProbeError, AssertionError):
    """
    Raised by JsonFixture assertions when a check does not pass.

    Attributes:
        result: The AssertionResult that did not pass
    """

    def __init__(self, result: Any, message: str):
        self.result = result
        super().__init__(message)


def kind_of(node: Any) -> str:
    """Return the JSON kind name of a document node."""
    if node is None:
        return "null"
    if isinstance(node, bool):
        return "boolean"
    if isinstance(node, dict):
        return "object"
    if isinstance(node, (list, tuple)):
        return "array"
    if isinstance(node, str):
        return "string"
    if isinstance(node, (int, float)):
        return "number"
    return type(node).__name__
