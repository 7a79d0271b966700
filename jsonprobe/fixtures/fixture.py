"""
JSON response fixtures.

A JsonFixture is a response-like object (status, headers, reason, protocol
version) whose body is a decoded JSON document. The body can be read and
edited by key path, and the fixture carries the content assertions:

    fixture = JsonFixture(200, {}, '{"data": {"foo": "bar"}}')

    fixture["data.foo"]                # "bar"
    fixture["data.foo"] = "baz"
    del fixture["data.foo"]

    fixture.assert_json({"data": {}}).assert_json_structure({"data": []})
"""

from __future__ import annotations

import copy
import json
import logging
from http import HTTPStatus
from typing import Any, Iterable

from ..accessor import KeyPath, PathAccessor
from ..assertions import AssertionEngine, AssertionResult
from ..config import DEFAULT_CONFIG, ProbeConfig
from ..formatting import Dumper, format_value
from ..structure import StructureMatcher

logger = logging.getLogger(__name__)


def _reason_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def decode_body(body: Any) -> Any:
    """
    Decode a response body into a document.

    JSON text (str or bytes) is parsed. Decoded documents are copied through
    a JSON round trip, so keys become strings (a YAML `200: ok` is stored
    under "200") and other values take their JSON form. None and empty text
    become an empty dict.

    Raises:
        ValueError: If the text is not valid JSON, or a decoded document
            has keys JSON cannot represent
    """
    if body is None:
        return {}
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        if not body.strip():
            return {}
        return json.loads(body)
    try:
        return json.loads(json.dumps(body, default=str))
    except TypeError as e:
        raise ValueError(f"Body cannot be represented as JSON: {e}") from e


class JsonFixture:
    """
    A response-like object with a JSON body addressable by key path.

    Attributes:
        status: HTTP status code
        headers: Response headers
        version: HTTP protocol version
        reason: Reason phrase (defaults to the standard phrase for the status)
        accessor: PathAccessor used for body reads and writes
        matcher: StructureMatcher used by assert_json_structure
        engine: AssertionEngine used by the other assertions
    """

    def __init__(
        self,
        status: int = 200,
        headers: dict[str, Any] | None = None,
        body: Any = None,
        version: str = "1.1",
        reason: str | None = None,
        *,
        config: ProbeConfig = DEFAULT_CONFIG,
        dumper: Dumper | None = None,
    ):
        self.status = int(status)
        self.headers = dict(headers or {})
        self.version = version
        self.reason = reason if reason is not None else _reason_phrase(self.status)
        self.config = config
        self.dumper = dumper

        self.accessor = PathAccessor(config.delimiter)
        self.engine = AssertionEngine(config, accessor=self.accessor)
        self.matcher: StructureMatcher = self.engine.matcher

        self._document: Any = {}
        self.with_body(body)

    @classmethod
    def from_response(cls, response: Any, **kwargs: Any) -> JsonFixture:
        """
        Build a fixture from a response-like object.

        Reads the status from `status_code` or `status`, the headers from
        `headers`, and the body from the first of `content`, `body` or `text`
        that holds str or bytes.
        """
        status = getattr(response, "status_code", None)
        if status is None:
            status = getattr(response, "status", 200)

        body = None
        for attr in ("content", "body", "text"):
            candidate = getattr(response, attr, None)
            if isinstance(candidate, (str, bytes)):
                body = candidate
                break
        else:
            logger.warning(
                f"No text body found on {type(response).__name__}, using an empty document"
            )

        reason = getattr(response, "reason_phrase", None) or getattr(response, "reason", None)

        return cls(
            status,
            dict(getattr(response, "headers", None) or {}),
            body,
            reason=reason if isinstance(reason, str) else None,
            **kwargs,
        )

    # ─────────────────────────────────────────────────────────────────────
    # Body
    # ─────────────────────────────────────────────────────────────────────

    def with_body(self, body: Any) -> JsonFixture:
        """Replace the body with JSON text or a decoded document."""
        self._document = decode_body(body)
        logger.debug(f"Fixture body replaced ({type(self._document).__name__})")
        return self

    @property
    def body(self) -> str:
        """The body encoded as JSON text."""
        return json.dumps(self._document, ensure_ascii=False)

    def json(self) -> Any:
        """Return the decoded document."""
        return self._document

    def as_dict(self) -> Any:
        """Return a deep copy of the decoded document."""
        return copy.deepcopy(self._document)

    def header(self, name: str, default: Any = None) -> Any:
        """Get a header value by case-insensitive name."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if str(key).lower() == lowered:
                return value
        return default

    def dump(self, dumper: Dumper | None = None) -> None:
        """Write the document for inspection."""
        dumper = dumper or self.dumper or Dumper(indent=self.config.indent)
        dumper.dump(self._document)

    # ─────────────────────────────────────────────────────────────────────
    # Key path access
    # ─────────────────────────────────────────────────────────────────────

    def has(self, path: str | KeyPath) -> bool:
        return self.accessor.has(self._document, path)

    def get(self, path: str | KeyPath, default: Any = None) -> Any:
        return self.accessor.get(self._document, path, default)

    def set(self, path: str | KeyPath, value: Any) -> JsonFixture:
        self._document = self.accessor.set(self._document, path, value)
        return self

    def forget(self, path: str | KeyPath) -> JsonFixture:
        self._document = self.accessor.forget(self._document, path)
        return self

    def only(self, paths: Iterable[str | KeyPath]) -> dict[str, Any]:
        return self.accessor.only(self._document, paths)

    def __contains__(self, path: str) -> bool:
        return self.has(path)

    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __delitem__(self, path: str) -> None:
        self.forget(path)

    # ─────────────────────────────────────────────────────────────────────
    # Assertions
    # ─────────────────────────────────────────────────────────────────────

    def assert_see(self, value: str) -> JsonFixture:
        return self._check(self.engine.see(self.body, value))

    def assert_see_text(self, value: str) -> JsonFixture:
        return self._check(self.engine.see_text(self.body, value))

    def assert_dont_see(self, value: str) -> JsonFixture:
        return self._check(self.engine.dont_see(self.body, value))

    def assert_dont_see_text(self, value: str) -> JsonFixture:
        return self._check(self.engine.dont_see_text(self.body, value))

    def assert_json(self, data: Any) -> JsonFixture:
        """Assert that the body contains the given JSON."""
        return self._check(self.engine.json_subset(self._document, data))

    def assert_exact_json(self, data: Any) -> JsonFixture:
        """Assert that the body is exactly the given JSON, ignoring key order."""
        return self._check(self.engine.exact_json(self._document, data))

    def assert_json_fragment(self, data: Any) -> JsonFixture:
        return self._check(self.engine.json_fragment(self._document, data))

    def assert_json_missing(self, data: Any) -> JsonFixture:
        return self._check(self.engine.json_missing(self._document, data))

    def assert_json_structure(self, structure: Any) -> JsonFixture:
        """
        Assert that the body has the given structure.

        Raises:
            MissingKey: A required key is absent
            ShapeMismatch: A node is not the kind the structure requires
        """
        self.matcher.validate(self._document, structure)
        return self

    def assert_body_equals(self, body: str | bytes | None) -> JsonFixture:
        return self._check(self.engine.body_equals(self.body, body))

    def assert_path_exists(self, path: str) -> JsonFixture:
        return self._check(self.engine.exists(self._document, path))

    def assert_path_missing(self, path: str) -> JsonFixture:
        return self._check(self.engine.missing(self._document, path))

    def assert_path_equals(self, path: str, expected: Any) -> JsonFixture:
        return self._check(self.engine.equals(self._document, path, expected))

    def assert_path_contains(self, path: str, expected: Any) -> JsonFixture:
        return self._check(self.engine.contains(self._document, path, expected))

    def assert_path_count(self, path: str, count: int) -> JsonFixture:
        return self._check(self.engine.length_eq(self._document, path, count))

    def _check(self, result: AssertionResult) -> JsonFixture:
        result.raise_for_failure(self.config.max_value_length)
        return self

    def __str__(self) -> str:
        return self.body

    def __repr__(self) -> str:
        body = format_value(self._document, self.config.max_value_length)
        return f"JsonFixture(status={self.status}, body={body})"
