"""
Fixture file loader.

This module provides the public API for loading and validating fixture
files (YAML or JSON) and structure files from disk or from strings.

A fixture file looks like:

    status: 200
    headers:
      Content-Type: application/json
    body:
      data:
        - id: 1
          name: first
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_CONFIG, ProbeConfig
from ..validation import FixtureValidator, ValidationResult
from .fixture import JsonFixture

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}


def _read_file(path: Path) -> tuple[Any, ValidationResult]:
    """Parse a YAML or JSON file, reporting read and syntax problems as errors."""
    result = ValidationResult()

    if not path.exists():
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    if not path.is_file():
        result.add_error(
            str(path),
            "Not a file",
            suggestion="Pass the path of a .yaml, .yml or .json file"
        )
        return None, result

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        result.add_error(
            str(path),
            f"File is not valid UTF-8: {e.reason} at byte {e.start}",
            suggestion="Save the file with UTF-8 encoding"
        )
        return None, result
    except OSError as e:
        result.add_error(str(path), f"Cannot read file: {e.strerror or e}")
        return None, result

    if path.suffix.lower() in JSON_SUFFIXES:
        try:
            return json.loads(text), result
        except json.JSONDecodeError as e:
            result.add_error(str(path), f"Invalid JSON syntax: {e}")
            return None, result

    try:
        return yaml.safe_load(text), result
    except yaml.YAMLError as e:
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result


def _build_fixture(
    data: Any,
    source: str,
    config: ProbeConfig,
) -> tuple[JsonFixture | None, ValidationResult]:
    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Fixture must be an object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    validator = FixtureValidator(data)
    result = validator.validate()
    if not result.is_valid:
        return None, result

    try:
        fixture = JsonFixture(
            data.get("status", 200),
            data.get("headers"),
            data["body"],
            version=data.get("version", "1.1"),
            reason=data.get("reason"),
            config=config,
        )
    except ValueError as e:
        result.add_error(
            "body",
            f"Invalid body: {e}",
            suggestion="Write the body as a YAML mapping with string keys, or as a quoted JSON string"
        )
        return None, result

    return fixture, result


def load_fixture(
    path: str | Path,
    config: ProbeConfig = DEFAULT_CONFIG,
) -> tuple[JsonFixture | None, ValidationResult]:
    """
    Load and validate a fixture from a YAML or JSON file.

    Args:
        path: Path to the fixture file (.yaml, .yml or .json)
        config: Options passed to the fixture

    Returns:
        Tuple of (JsonFixture or None, ValidationResult)
        If validation fails, JsonFixture will be None.

    Example:
        fixture, result = load_fixture("fixtures/users.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        fixture.assert_json_structure({"data": {"*": ["id"]}})
    """
    path = Path(path)

    data, result = _read_file(path)
    if not result.is_valid:
        return None, result

    fixture, result = _build_fixture(data, str(path), config)
    if fixture is not None:
        logger.info(f"Loaded fixture {path} (status {fixture.status})")
    return fixture, result


def validate_fixture_yaml(
    yaml_string: str,
    config: ProbeConfig = DEFAULT_CONFIG,
) -> tuple[JsonFixture | None, ValidationResult]:
    """
    Validate a fixture from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (JsonFixture or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _build_fixture(data, "yaml", config)


def load_structure(path: str | Path) -> tuple[Any, ValidationResult]:
    """
    Load a structure description from a YAML or JSON file.

    Returns:
        Tuple of (structure or None, ValidationResult)
    """
    path = Path(path)

    data, result = _read_file(path)
    if not result.is_valid:
        return None, result

    if not isinstance(data, (dict, list)):
        result.add_error(
            str(path),
            "Structure must be an object or a list",
            value=type(data).__name__
        )
        return None, result

    logger.debug(f"Loaded structure {path}")
    return data, result
