"""
Whole-document comparisons used by the JSON assertions.

- Subset: every key and value in `expected` is present in `actual`.
  Lists are compared position by position.
- Canonical JSON: compact JSON with recursively sorted keys, so two
  documents that differ only in key order encode identically.
- Fragments: the canonical `"key":value` text of each top-level pair, used
  to search for a pair anywhere inside a canonical document.
"""

from __future__ import annotations

import json
from typing import Any

from ..accessor.path import join_location


def find_mismatch(expected: Any, actual: Any, location: str = "") -> str | None:
    """
    Return the location of the first part of `expected` missing from `actual`.

    Returns None when `expected` is a subset of `actual`. The root location
    is reported as "$".
    """
    if isinstance(expected, dict):
        if not isinstance(actual, dict):
            return location or "$"
        for key, value in expected.items():
            if key not in actual:
                return join_location(location, key)
            mismatch = find_mismatch(value, actual[key], join_location(location, key))
            if mismatch is not None:
                return mismatch
        return None

    if isinstance(expected, list):
        if not isinstance(actual, list):
            return location or "$"
        for index, value in enumerate(expected):
            if index >= len(actual):
                return join_location(location, index)
            mismatch = find_mismatch(value, actual[index], join_location(location, index))
            if mismatch is not None:
                return mismatch
        return None

    if expected != actual:
        return location or "$"
    return None


def is_subset(expected: Any, actual: Any) -> bool:
    """Check that `expected` is contained in `actual`."""
    return find_mismatch(expected, actual) is None


def canonical_json(document: Any) -> str:
    """
    Encode a document as compact JSON with sorted keys.

    Non-string keys are converted to their JSON string form before sorting,
    so {1: "a", "b": 2} encodes as {"1":"a","b":2}.
    """
    if _has_non_string_keys(document):
        document = json.loads(json.dumps(document, default=str))
    return json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _has_non_string_keys(node: Any) -> bool:
    if isinstance(node, dict):
        return any(
            not isinstance(key, str) or _has_non_string_keys(value)
            for key, value in node.items()
        )
    if isinstance(node, (list, tuple)):
        return any(_has_non_string_keys(item) for item in node)
    return False


def fragments(data: Any) -> list[str]:
    """
    Return the canonical fragment text for each top-level entry of `data`.

    For a dict each fragment is `"key":value`; for a list each fragment is
    the canonical encoding of an element.
    """
    if isinstance(data, dict):
        return [canonical_json({key: data[key]})[1:-1] for key in sorted(data, key=str)]
    if isinstance(data, list):
        return [canonical_json(item) for item in data]
    return [canonical_json(data)]
