"""
Runtime options for jsonprobe.

Options can be built directly, from a dict, or loaded from a small YAML file:

    delimiter: "."
    wildcard: "*"
    max_value_length: 100
    indent: 2
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .validation import ValidationResult


@dataclass(frozen=True)
class ProbeConfig:
    """Options shared by the accessor, the matcher and the formatters."""
    delimiter: str = "."
    wildcard: str = "*"
    max_value_length: int = 100  # Truncation limit for values in failure messages
    indent: int = 2  # Indentation for formatted documents

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProbeConfig:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


DEFAULT_CONFIG = ProbeConfig()


def validate_config(data: dict[str, Any]) -> ValidationResult:
    """Check raw config data and collect every problem found."""
    result = ValidationResult()
    known = {f.name for f in fields(ProbeConfig)}

    for key in data:
        if key not in known:
            result.add_error(
                key,
                f"Unknown option '{key}'",
                suggestion=f"Valid options are: {', '.join(sorted(known))}",
            )

    for key in ("delimiter", "wildcard"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value:
                result.add_error(key, "Must be a non-empty string", value=value)

    for key in ("max_value_length", "indent"):
        if key in data:
            value = data[key]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                result.add_error(key, "Must be a non-negative integer", value=value)

    if result.is_valid and data.get("delimiter", ".") == data.get("wildcard", "*"):
        result.add_error(
            "wildcard",
            "Wildcard must differ from the path delimiter",
            value=data.get("wildcard", "*"),
        )

    return result


def load_config(path: str | Path) -> tuple[ProbeConfig | None, ValidationResult]:
    """
    Load options from a YAML file.

    Args:
        path: Path to the YAML options file

    Returns:
        Tuple of (ProbeConfig or None, ValidationResult)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(str(path), "File not found", suggestion="Check the file path is correct")
        return None, result

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        result = ValidationResult()
        result.add_error(str(path), f"Cannot read options file: {e}")
        return None, result

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(str(path), f"Invalid YAML syntax: {e}")
        return None, result

    if data is None:
        return DEFAULT_CONFIG, ValidationResult()

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(str(path), "Options must be a YAML object", value=type(data).__name__)
        return None, result

    result = validate_config(data)
    if not result.is_valid:
        return None, result

    return ProbeConfig.from_dict(data), result
