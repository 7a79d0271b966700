"""
Assertion engine for evaluating checks on decoded JSON documents.

This module provides the assertion logic behind JsonFixture: body text
checks, whole-document JSON comparisons, structure checks, and value checks
addressed by key path or JSONPath.
"""

from __future__ import annotations

import re
from typing import Any

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from ..accessor import PathAccessor
from ..config import DEFAULT_CONFIG, ProbeConfig
from ..errors import MalformedPath, MissingKey, ShapeMismatch, StructureError
from ..formatting import format_document, format_value
from ..structure import StructureMatcher, canonical_json, find_mismatch, fragments
from .models import AssertionResult

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Returned by the accessor when a key path does not resolve
_MISSING = object()


def strip_tags(text: str) -> str:
    """Remove HTML/XML tags from text."""
    return _TAG_PATTERN.sub("", text)


class AssertionEngine:
    """
    Engine for running assertions on decoded JSON documents.

    Supports various assertion types:
    - see / dont_see: Check if the body text contains a string
    - see_text / dont_see_text: Same, with HTML tags stripped first
    - json_subset: Check if the document contains the expected JSON
    - exact_json: Check if the document equals the expected JSON
    - json_fragment / json_missing: Check for a key/value pair anywhere
    - json_structure: Check the document shape against a structure
    - exists / equals / contains / length_*: Check values at a path

    Paths starting with "$" are JSONPath expressions, anything else is a
    dot-delimited key path.

    Example:
        engine = AssertionEngine()
        data = {"results": [{"id": 1}, {"id": 2}]}

        result = engine.exists(data, "results.0")
        result = engine.length_gte(data, "$.results", 1)
        result = engine.json_structure(data, {"results": {"*": ["id"]}})
    """

    def __init__(
        self,
        config: ProbeConfig = DEFAULT_CONFIG,
        accessor: PathAccessor | None = None,
        matcher: StructureMatcher | None = None,
    ):
        self.config = config
        self.accessor = accessor or PathAccessor(config.delimiter)
        self.matcher = matcher or StructureMatcher(
            wildcard=config.wildcard,
            formatter=self._format,
            delimiter=config.delimiter,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Body text
    # ─────────────────────────────────────────────────────────────────────

    def see(self, text: str, value: str) -> AssertionResult:
        """Assert that the body text contains a string."""
        return self._check_text(text, value, present=True)

    def see_text(self, text: str, value: str) -> AssertionResult:
        """Assert that the body text, with tags stripped, contains a string."""
        return self._check_text(strip_tags(text), value, present=True)

    def dont_see(self, text: str, value: str) -> AssertionResult:
        """Assert that the body text does not contain a string."""
        return self._check_text(text, value, present=False)

    def dont_see_text(self, text: str, value: str) -> AssertionResult:
        """Assert that the body text, with tags stripped, does not contain a string."""
        return self._check_text(strip_tags(text), value, present=False)

    def body_equals(self, text: str, expected: str | bytes | None) -> AssertionResult:
        """
        Assert that the body text equals an expected body.

        An empty expected body always passes.
        """
        if isinstance(expected, bytes):
            expected = expected.decode("utf-8")
        expected = "" if expected is None else str(expected)

        if expected == "":
            return AssertionResult.passed_result(message="No body expected")

        if expected == text:
            return AssertionResult.passed_result(message="Body matches expected")
        return AssertionResult.failed_result(
            message="Body does not match",
            expected=expected,
            actual=text,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Whole-document JSON
    # ─────────────────────────────────────────────────────────────────────

    def json_subset(self, document: Any, expected: Any) -> AssertionResult:
        """
        Assert that the document contains the expected JSON.

        Keys missing from `expected` are ignored; lists are compared by position.
        """
        mismatch = find_mismatch(expected, document)
        if mismatch is None:
            return AssertionResult.passed_result(message="Document contains expected JSON")

        return AssertionResult.failed_result(
            message=(
                f"Unable to find JSON:\n\n[{self._format(expected)}]\n\n"
                f"within response JSON:\n\n[{self._format(document)}]."
            ),
            path=mismatch,
        )

    def exact_json(self, document: Any, expected: Any) -> AssertionResult:
        """Assert that the document equals the expected JSON, ignoring key order."""
        actual_json = canonical_json(document)
        expected_json = canonical_json(expected)

        if actual_json == expected_json:
            return AssertionResult.passed_result(message="Document matches expected JSON exactly")

        return AssertionResult.failed_result(
            message="Document does not match expected JSON",
            expected=expected_json,
            actual=actual_json,
            details={"first difference": self._first_difference(expected, document)},
        )

    def json_fragment(self, document: Any, expected: Any) -> AssertionResult:
        """Assert that each top-level pair of `expected` appears somewhere in the document."""
        actual_json = canonical_json(document)

        for fragment in fragments(expected):
            if fragment not in actual_json:
                return AssertionResult.failed_result(
                    message=(
                        f"Unable to find JSON fragment:\n\n[{fragment}]\n\n"
                        f"within\n\n[{actual_json}]."
                    ),
                )

        return AssertionResult.passed_result(message="Document contains JSON fragment")

    def json_missing(self, document: Any, unexpected: Any) -> AssertionResult:
        """Assert that no top-level pair of `unexpected` appears in the document."""
        actual_json = canonical_json(document)

        for fragment in fragments(unexpected):
            if fragment in actual_json:
                return AssertionResult.failed_result(
                    message=(
                        f"Found unexpected JSON fragment:\n\n[{fragment}]\n\n"
                        f"within\n\n[{actual_json}]."
                    ),
                )

        return AssertionResult.passed_result(message="Document does not contain JSON fragment")

    def json_structure(self, document: Any, structure: Any) -> AssertionResult:
        """Assert that the document has the given structure."""
        try:
            self.matcher.validate(document, structure)
        except MissingKey as e:
            return AssertionResult.failed_result(
                message=e.message,
                path=e.location or "$",
                expected=f"key {e.key!r}",
                details={"missing key": e.key},
            )
        except ShapeMismatch as e:
            return AssertionResult.failed_result(
                message=e.message,
                path=e.location or "$",
                expected=e.expected,
                actual=e.actual,
            )
        except StructureError as e:
            return AssertionResult.failed_result(message=str(e), path=e.location or "$")
        except TypeError as e:
            return AssertionResult.error_result(
                message="Invalid structure",
                details={"error": str(e)},
            )

        return AssertionResult.passed_result(message="Document has expected structure")

    # ─────────────────────────────────────────────────────────────────────
    # Values at a path
    # ─────────────────────────────────────────────────────────────────────

    def exists(self, data: Any, path: str) -> AssertionResult:
        """
        Assert that a path exists in the data.

        Args:
            data: The JSON data to search
            path: Key path or JSONPath expression

        Returns:
            AssertionResult indicating pass/fail
        """
        matches, error = self._evaluate_path(data, path)
        if error:
            return error

        if matches:
            return AssertionResult.passed_result(
                message="Path exists",
                path=path,
                actual=self._summarize_matches(matches),
            )
        return AssertionResult.failed_result(
            message="Path does not exist",
            path=path,
            expected="path to exist",
            actual="no matches found",
        )

    def missing(self, data: Any, path: str) -> AssertionResult:
        """Assert that a path does not exist in the data."""
        matches, error = self._evaluate_path(data, path)
        if error:
            return error

        if not matches:
            return AssertionResult.passed_result(message="Path is absent", path=path)
        return AssertionResult.failed_result(
            message="Path exists",
            path=path,
            expected="path to be absent",
            actual=self._summarize_matches(matches),
        )

    def equals(self, data: Any, path: str, expected: Any) -> AssertionResult:
        """
        Assert that the value at a path equals an expected value.

        Args:
            data: The JSON data to search
            path: Key path or JSONPath expression
            expected: The expected value

        Returns:
            AssertionResult indicating pass/fail
        """
        matches, error = self._evaluate_path(data, path)
        if error:
            return error

        if not matches:
            return AssertionResult.failed_result(
                message="Path does not exist",
                path=path,
                expected=expected,
                actual="<path not found>",
            )

        actual = matches[0]

        if actual == expected:
            return AssertionResult.passed_result(
                message="Value matches expected",
                path=path,
                actual=actual,
            )
        return AssertionResult.failed_result(
            message="Value does not match",
            path=path,
            expected=expected,
            actual=actual,
            details=self._type_mismatch_hint(expected, actual),
        )

    def contains(self, data: Any, path: str, expected: Any) -> AssertionResult:
        """
        Assert that the value at a path contains an expected value.

        Works with:
        - Strings: checks if expected is a substring
        - Arrays: checks if expected is an element
        - Objects: checks if expected is a key
        """
        matches, error = self._evaluate_path(data, path)
        if error:
            return error

        if not matches:
            return AssertionResult.failed_result(
                message="Path does not exist",
                path=path,
                expected=f"container with {expected!r}",
                actual="<path not found>",
            )

        actual = matches[0]

        if isinstance(actual, str):
            if not isinstance(expected, str):
                return AssertionResult.failed_result(
                    message="Cannot check if string contains non-string",
                    path=path,
                    expected=expected,
                    actual=actual,
                    details={"hint": "Expected value should be a string for substring check"},
                )
            if expected in actual:
                return AssertionResult.passed_result(
                    message="String contains expected substring",
                    path=path,
                    actual=actual,
                )
            return AssertionResult.failed_result(
                message="String does not contain expected substring",
                path=path,
                expected=f"string containing {expected!r}",
                actual=actual,
            )

        if isinstance(actual, list):
            if expected in actual:
                return AssertionResult.passed_result(
                    message="Array contains expected value",
                    path=path,
                    actual=actual,
                )
            return AssertionResult.failed_result(
                message="Array does not contain expected value",
                path=path,
                expected=f"array containing {expected!r}",
                actual=actual,
                details={"array_length": len(actual)},
            )

        if isinstance(actual, dict):
            if isinstance(expected, str) and expected in actual:
                return AssertionResult.passed_result(
                    message="Object contains expected key",
                    path=path,
                    actual=list(actual.keys()),
                )
            return AssertionResult.failed_result(
                message="Object does not contain expected key",
                path=path,
                expected=f"object with key {expected!r}",
                actual=list(actual.keys()),
            )

        return AssertionResult.error_result(
            message=f"Cannot check containment on {type(actual).__name__}",
            path=path,
            details={"type": type(actual).__name__, "value": actual},
        )

    def length_gte(self, data: Any, path: str, min_length: int) -> AssertionResult:
        """Assert that an array at the path has at least N items."""
        return self._check_length(data, path, min_length, "gte")

    def length_lte(self, data: Any, path: str, max_length: int) -> AssertionResult:
        """Assert that an array at the path has at most N items."""
        return self._check_length(data, path, max_length, "lte")

    def length_eq(self, data: Any, path: str, exact_length: int) -> AssertionResult:
        """Assert that an array at the path has exactly N items."""
        return self._check_length(data, path, exact_length, "eq")

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _check_text(self, text: str, value: str, present: bool) -> AssertionResult:
        snippet = format_value(text, self.config.max_value_length)
        found = str(value) in text

        if found and present:
            return AssertionResult.passed_result(message=f"Body contains {value!r}")
        if not found and not present:
            return AssertionResult.passed_result(message=f"Body does not contain {value!r}")
        if present:
            return AssertionResult.failed_result(
                message=f"Body does not contain {value!r}",
                details={"body": snippet},
            )
        return AssertionResult.failed_result(
            message=f"Body unexpectedly contains {value!r}",
            details={"body": snippet},
        )

    def _check_length(
        self, data: Any, path: str, expected_length: int, op: str
    ) -> AssertionResult:
        """Internal helper for length checks."""
        matches, error = self._evaluate_path(data, path)
        if error:
            return error

        if not matches:
            return AssertionResult.failed_result(
                message="Path does not exist",
                path=path,
                expected="array with length check",
                actual="<path not found>",
            )

        actual = matches[0]

        if not isinstance(actual, (list, str, dict)):
            return AssertionResult.error_result(
                message=f"Cannot check length of {type(actual).__name__}",
                path=path,
                details={"type": type(actual).__name__},
            )

        actual_length = len(actual)
        if isinstance(actual, list):
            label = "Array"
        elif isinstance(actual, str):
            label = "String"
        else:
            label = "Object"

        if op == "gte":
            if actual_length >= expected_length:
                return AssertionResult.passed_result(
                    message=f"{label} has at least {expected_length} items",
                    path=path,
                    actual=f"length {actual_length}",
                )
            return AssertionResult.failed_result(
                message=f"{label} is too short",
                path=path,
                expected=f"length >= {expected_length}",
                actual=f"length {actual_length}",
                details={"difference": expected_length - actual_length},
            )

        if op == "lte":
            if actual_length <= expected_length:
                return AssertionResult.passed_result(
                    message=f"{label} has at most {expected_length} items",
                    path=path,
                    actual=f"length {actual_length}",
                )
            return AssertionResult.failed_result(
                message=f"{label} is too long",
                path=path,
                expected=f"length <= {expected_length}",
                actual=f"length {actual_length}",
                details={"excess": actual_length - expected_length},
            )

        if actual_length == expected_length:
            return AssertionResult.passed_result(
                message=f"{label} has exactly {expected_length} items",
                path=path,
                actual=f"length {actual_length}",
            )
        return AssertionResult.failed_result(
            message=f"{label} length mismatch",
            path=path,
            expected=f"length == {expected_length}",
            actual=f"length {actual_length}",
            details={"difference": abs(actual_length - expected_length)},
        )

    def _evaluate_path(self, data: Any, path: str) -> tuple[list[Any], AssertionResult | None]:
        """
        Evaluate a key path or JSONPath expression on data.

        Returns:
            Tuple of (matched values, error). If error is not None, matches is empty.
        """
        if isinstance(path, str) and path.startswith("$"):
            try:
                jsonpath_expr = parse_jsonpath(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                return [], AssertionResult.error_result(
                    message="Invalid JSONPath expression",
                    path=path,
                    details={"error": str(e)},
                )
            return [match.value for match in jsonpath_expr.find(data)], None

        try:
            value = self.accessor.get(data, path, _MISSING)
        except MalformedPath as e:
            return [], AssertionResult.error_result(
                message="Invalid key path",
                path=str(path),
                details={"error": e.reason},
            )
        if value is _MISSING:
            return [], None
        return [value], None

    def _summarize_matches(self, matches: list[Any]) -> Any:
        """Summarize matches for display."""
        if len(matches) == 1:
            return matches[0]
        return matches

    def _type_mismatch_hint(self, expected: Any, actual: Any) -> dict[str, Any]:
        """Generate a hint if types don't match."""
        if type(expected) != type(actual):
            return {
                "hint": f"Type mismatch: expected {type(expected).__name__}, got {type(actual).__name__}"
            }
        return {}

    def _first_difference(self, expected: Any, actual: Any) -> str:
        missing = find_mismatch(expected, actual)
        if missing is not None:
            return missing
        extra = find_mismatch(actual, expected)
        return extra if extra is not None else "$"

    def _format(self, document: Any) -> str:
        return format_document(document, indent=self.config.indent)


# Convenience functions for quick assertions
def assert_path_exists(data: Any, path: str) -> AssertionResult:
    """Check if a key path or JSONPath exists in the data."""
    return AssertionEngine().exists(data, path)


def assert_equals(data: Any, path: str, expected: Any) -> AssertionResult:
    """Check if the value at a path equals expected."""
    return AssertionEngine().equals(data, path, expected)


def assert_contains(data: Any, path: str, expected: Any) -> AssertionResult:
    """Check if the value at a path contains expected."""
    return AssertionEngine().contains(data, path, expected)


def assert_length_gte(data: Any, path: str, min_length: int) -> AssertionResult:
    """Check if the array at a path has at least N items."""
    return AssertionEngine().length_gte(data, path, min_length)
