"""
Validation of fixture files.

This module contains the checks run on raw fixture data (parsed YAML or
JSON) before a JsonFixture is built from it, and the result types used to
report problems with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "headers.Content-Type"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of fixture validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Fixture validation passed"
        lines = [f"Fixture validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Fixture Validator
# ─────────────────────────────────────────────────────────────────────────────

class FixtureValidator:
    """Validates raw fixture data against the fixture file layout."""

    REQUIRED_TOP_LEVEL = {"body"}
    OPTIONAL_TOP_LEVEL = {"status", "headers", "version", "reason"}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_status()
        self._validate_headers()
        self._validate_text_field("version")
        self._validate_text_field("reason")
        self._validate_body()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your fixture file"
            )

        for key in sorted(map(str, unknown)):
            self.result.add_error(
                key,
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_status(self) -> None:
        status = self.data.get("status")
        if status is None:
            return
        if not isinstance(status, int) or isinstance(status, bool):
            self.result.add_error(
                "status",
                "Must be an integer",
                value=status,
                suggestion="Use 'status: 200'"
            )
        elif not 100 <= status <= 599:
            self.result.add_error(
                "status",
                "Must be a valid HTTP status code (100-599)",
                value=status
            )

    def _validate_headers(self) -> None:
        headers = self.data.get("headers")
        if headers is None:
            return
        if not isinstance(headers, dict):
            self.result.add_error(
                "headers",
                "Must be an object (header name to value)",
                value=headers
            )
            return

        for name, value in headers.items():
            if not isinstance(name, str):
                self.result.add_error(
                    f"headers.{name}",
                    "Header name must be a string",
                    value=name
                )
            elif not isinstance(value, (str, int)) or isinstance(value, bool):
                self.result.add_error(
                    f"headers.{name}",
                    "Header value must be a string",
                    value=value
                )

    def _validate_text_field(self, key: str) -> None:
        value = self.data.get(key)
        if value is not None and not isinstance(value, str):
            self.result.add_error(
                key,
                "Must be a string",
                value=value
            )

    def _validate_body(self) -> None:
        body = self.data.get("body")
        if body is not None and not isinstance(body, (dict, list, str)):
            self.result.add_error(
                "body",
                "Must be an object, a list, or a JSON string",
                value=body,
                suggestion="Write the body as YAML mapping or as a quoted JSON string"
            )
