"""
jsonprobe - Assertion helpers for JSON response payloads

This package provides components for reading, editing and asserting on
decoded JSON documents in tests.

Subpackages:
    - accessor: Read, write and delete values by dot-delimited key path
    - structure: Structure matching with wildcards, subset comparisons
    - assertions: Assertion engine for response validation
    - fixtures: Response-like JSON fixtures and fixture-file loading

Usage:
    from jsonprobe import JsonFixture, load_fixture

    fixture = JsonFixture(200, {}, '{"data": [{"id": 1}, {"id": 2}]}')

    fixture["data.0.id"]                                   # 1
    fixture.set("data.1.name", "second")
    fixture.assert_json_structure({"data": {"*": ["id"]}})
    fixture.assert_json({"data": [{"id": 1}]})

    # Fixtures stored on disk
    fixture, result = load_fixture("fixtures/users.yaml")
    if not result.is_valid:
        print(result)
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    JsonProbeError,
    AssertionFailed,
    MalformedPath,
    IndexOutOfRange,
    StructureError,
    MissingKey,
    ShapeMismatch,
)

# Options
from .config import ProbeConfig, load_config

# Formatting
from .formatting import Dumper, format_document, format_value

# Re-export accessor for convenience
from .accessor import (
    KeyPath,
    PathAccessor,
    has_path,
    get_path,
    set_path,
    forget_path,
    only_paths,
)

# Re-export structure for convenience
from .structure import (
    StructureMatcher,
    assert_structure,
    has_structure,
    canonical_json,
    is_subset,
)

# Re-export assertions for convenience
from .assertions import (
    AssertionResult,
    AssertionStatus,
    AssertionEngine,
    assert_path_exists,
    assert_equals,
    assert_contains,
    assert_length_gte,
)

# Re-export fixtures for convenience
from .fixtures import (
    JsonFixture,
    load_fixture,
    load_structure,
    validate_fixture_yaml,
)

# Validation
from .validation import ValidationError, ValidationResult

__all__ = [
    # Package info
    "__version__",
    # Errors
    "JsonProbeError",
    "AssertionFailed",
    "MalformedPath",
    "IndexOutOfRange",
    "StructureError",
    "MissingKey",
    "ShapeMismatch",
    # Options
    "ProbeConfig",
    "load_config",
    # Formatting
    "Dumper",
    "format_document",
    "format_value",
    # Accessor
    "KeyPath",
    "PathAccessor",
    "has_path",
    "get_path",
    "set_path",
    "forget_path",
    "only_paths",
    # Structure
    "StructureMatcher",
    "assert_structure",
    "has_structure",
    "canonical_json",
    "is_subset",
    # Assertions
    "AssertionResult",
    "AssertionStatus",
    "AssertionEngine",
    "assert_path_exists",
    "assert_equals",
    "assert_contains",
    "assert_length_gte",
    # Fixtures
    "JsonFixture",
    "load_fixture",
    "load_structure",
    "validate_fixture_yaml",
    # Validation
    "ValidationError",
    "ValidationResult",
]
