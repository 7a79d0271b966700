"""
JSON response fixtures.

This package provides the JsonFixture response object and the loaders for
fixture files.

Usage:
    from jsonprobe.fixtures import JsonFixture, load_fixture

    fixture = JsonFixture(200, {}, '{"data": {"foo": "bar"}}')
    fixture["data.foo"]   # "bar"

    fixture, result = load_fixture("fixtures/users.yaml")
"""

from .fixture import JsonFixture, decode_body

from .loader import load_fixture, load_structure, validate_fixture_yaml

__all__ = [
    # Fixture
    "JsonFixture",
    "decode_body",
    # Loader functions
    "load_fixture",
    "load_structure",
    "validate_fixture_yaml",
]
