"""
Assertion result models.

Every AssertionEngine check returns an AssertionResult instead of raising.
JsonFixture turns failed results into AssertionFailed errors with
raise_for_failure(), so pytest shows the rendered result as the failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import AssertionFailed
from ..formatting import format_value


class AssertionStatus(str, Enum):
    """Status of an assertion check."""
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"  # malformed key path, invalid JSONPath, invalid structure

    @property
    def icon(self) -> str:
        return {"passed": "✅", "failed": "❌", "error": "⚠️"}[self.value]


@dataclass
class AssertionResult:
    """
    Result of a single check on a document or body.

    Attributes:
        status: Whether the check passed, failed, or could not be evaluated
        message: Human-readable description of the result
        path: Key path, JSONPath or structure location the result refers to
        expected: What was expected (for comparison checks)
        actual: What was found in the document
        details: Additional context, e.g. the missing key or a type hint
    """
    status: AssertionStatus
    message: str
    path: str | None = None
    expected: Any = None
    actual: Any = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status == AssertionStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == AssertionStatus.FAILED

    def render(self, max_length: int = 100) -> str:
        """
        Format the result for display.

        Expected, actual and detail values are truncated to `max_length`
        characters. Passing results are rendered on a single line.
        """
        if self.passed:
            return f"{self.status.icon} PASS: {self.message}"

        lines = [f"{self.status.icon} {self.status.value.upper()}: {self.message}"]
        if self.path:
            lines.append(f"   Path: {self.path}")

        for label, value in (("Expected: ", self.expected), ("Actual:   ", self.actual)):
            if value is not None:
                lines.append(f"   {label}{format_value(value, max_length)}")

        lines.extend(
            f"   {key}: {format_value(value, max_length)}"
            for key, value in self.details.items()
        )
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def raise_for_failure(self, max_length: int = 100) -> None:
        """
        Raise AssertionFailed unless the check passed.

        ERROR results raise as well: a check that could not be evaluated
        must not let a test pass.
        """
        if not self.passed:
            raise AssertionFailed(self, self.render(max_length))

    @classmethod
    def passed_result(
        cls,
        message: str,
        path: str | None = None,
        actual: Any = None,
    ) -> AssertionResult:
        return cls(AssertionStatus.PASSED, message, path=path, actual=actual)

    @classmethod
    def failed_result(
        cls,
        message: str,
        path: str | None = None,
        expected: Any = None,
        actual: Any = None,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        return cls(
            AssertionStatus.FAILED,
            message,
            path=path,
            expected=expected,
            actual=actual,
            details=details or {},
        )

    @classmethod
    def error_result(
        cls,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> AssertionResult:
        """Create a result for a check that could not be evaluated."""
        return cls(AssertionStatus.ERROR, message, path=path, details=details or {})
