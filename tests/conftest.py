"""Shared pytest fixtures for jsonprobe tests."""

from pathlib import Path

import pytest


@pytest.fixture
def users_document() -> dict:
    """A typical list response body."""
    return {
        "data": [
            {"id": 1, "name": "Ada", "roles": ["admin"]},
            {"id": 2, "name": "Grace", "roles": []},
        ],
        "meta": {"total": 2, "page": 1},
    }


@pytest.fixture
def fixture_file(tmp_path: Path) -> Path:
    """A valid YAML fixture file on disk."""
    path = tmp_path / "users.yaml"
    path.write_text(
        "status: 200\n"
        "headers:\n"
        "  Content-Type: application/json\n"
        "body:\n"
        "  data:\n"
        "    - id: 1\n"
        "      name: Ada\n"
        "    - id: 2\n"
        "      name: Grace\n"
        "  meta:\n"
        "    total: 2\n"
    )
    return path


@pytest.fixture
def structure_file(tmp_path: Path) -> Path:
    """A structure file matching fixture_file."""
    path = tmp_path / "users.structure.yaml"
    path.write_text(
        "data:\n"
        "  '*':\n"
        "    - id\n"
        "    - name\n"
        "meta:\n"
        "  - total\n"
    )
    return path
