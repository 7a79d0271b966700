"""
Assertion Engine for JSON Response Validation

This package provides assertion capabilities for validating decoded
JSON documents and response bodies against expected conditions.

Supported assertions:
    - see / see_text / dont_see / dont_see_text: Body text checks
    - json_subset: Document contains the expected JSON
    - exact_json: Document equals the expected JSON (key order ignored)
    - json_fragment / json_missing: Key/value pair present or absent
    - json_structure: Document shape matches a structure
    - exists / missing / equals / contains: Value checks at a path
    - length_gte / length_lte / length_eq: Size checks at a path

Usage:
    from jsonprobe.assertions import AssertionEngine, assert_path_exists

    data = {"results": [{"id": 1}, {"id": 2}]}

    # Using the engine
    engine = AssertionEngine()
    result = engine.exists(data, "results.0")
    result = engine.length_gte(data, "$.results", 1)
    result = engine.json_structure(data, {"results": {"*": ["id"]}})

    # Using convenience functions
    result = assert_path_exists(data, "results.0.id")

    # Check result
    if result.passed:
        print("✅ Assertion passed")
    else:
        print(result)  # Detailed failure message
"""

# Models
from .models import AssertionResult, AssertionStatus

# Engine
from .engine import (
    AssertionEngine,
    strip_tags,
    # Convenience functions
    assert_path_exists,
    assert_equals,
    assert_contains,
    assert_length_gte,
)

__all__ = [
    # Models
    "AssertionResult",
    "AssertionStatus",
    # Engine
    "AssertionEngine",
    "strip_tags",
    # Convenience functions
    "assert_path_exists",
    "assert_equals",
    "assert_contains",
    "assert_length_gte",
]
