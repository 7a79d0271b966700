"""Unit tests for the assertion engine and result model."""

import pytest

from jsonprobe.assertions import (
    AssertionEngine,
    AssertionResult,
    AssertionStatus,
    assert_contains,
    assert_equals,
    assert_length_gte,
    assert_path_exists,
    strip_tags,
)
from jsonprobe.config import ProbeConfig
from jsonprobe.errors import AssertionFailed


@pytest.fixture
def engine() -> AssertionEngine:
    return AssertionEngine()


class TestAssertionResult:
    """Tests for AssertionResult formatting and helpers."""

    def test_passed_result(self):
        result = AssertionResult.passed_result("ok")
        assert result.passed
        assert str(result) == "✅ PASS: ok"

    def test_failed_result_lists_context(self):
        result = AssertionResult.failed_result(
            "Value does not match", path="a.b", expected=1, actual=2, details={"hint": "x"}
        )
        text = str(result)
        assert "❌ FAILED: Value does not match" in text
        assert "Path: a.b" in text
        assert "Expected: 1" in text
        assert "Actual:   2" in text
        assert "hint: 'x'" in text

    def test_raise_for_failure(self):
        AssertionResult.passed_result("ok").raise_for_failure()

        failed = AssertionResult.failed_result("broken")
        with pytest.raises(AssertionFailed, match="broken") as exc_info:
            failed.raise_for_failure()
        assert exc_info.value.result is failed
        assert isinstance(exc_info.value, AssertionError)

    def test_error_result_also_raises(self):
        with pytest.raises(AssertionFailed, match="ERROR: bad path"):
            AssertionResult.error_result("bad path").raise_for_failure()

    def test_render_truncates_values(self):
        result = AssertionResult.failed_result("Value does not match", expected="x" * 40)

        assert len(result.render(max_length=10).splitlines()[1]) == len("   Expected: ") + 10
        assert "x" * 38 in str(result)

    def test_error_result(self):
        result = AssertionResult.error_result("bad path")
        assert result.status == AssertionStatus.ERROR
        assert not result.passed and not result.failed


class TestTextAssertions:
    """Tests for see / dont_see and their text variants."""

    def test_see(self, engine):
        assert engine.see('{"name": "Ada"}', "Ada").passed
        assert engine.see('{"name": "Ada"}', "Grace").failed

    def test_dont_see(self, engine):
        assert engine.dont_see("hello", "bye").passed
        assert engine.dont_see("hello", "ell").failed

    def test_see_text_strips_tags(self, engine):
        assert engine.see_text("<b>Hello</b> <i>world</i>", "Hello world").passed
        assert engine.dont_see_text("<b>Hello</b>", "<b>").passed

    def test_strip_tags(self):
        assert strip_tags('<p class="x">a</p>b<br/>') == "ab"

    def test_failure_includes_truncated_body(self):
        engine = AssertionEngine(ProbeConfig(max_value_length=10))
        result = engine.see("x" * 50, "y")
        assert result.details["body"].endswith("...")
        assert len(result.details["body"]) == 10


class TestJsonAssertions:
    """Tests for subset, exact, fragment and structure assertions."""

    def test_json_subset(self, engine, users_document):
        assert engine.json_subset(users_document, {"meta": {"total": 2}}).passed

    def test_json_subset_failure_message(self, engine, users_document):
        result = engine.json_subset(users_document, {"meta": {"total": 3}})
        assert result.failed
        assert result.path == "meta.total"
        assert "Unable to find JSON" in result.message
        assert "within response JSON" in result.message

    def test_exact_json_ignores_key_order(self, engine):
        assert engine.exact_json({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1}).passed

    def test_exact_json_rejects_extra_keys(self, engine):
        result = engine.exact_json({"a": 1, "b": 2}, {"a": 1})
        assert result.failed
        assert result.details["first difference"] == "b"

    def test_json_fragment(self, engine, users_document):
        assert engine.json_fragment(users_document, {"name": "Grace"}).passed
        assert engine.json_fragment(users_document, {"total": 2, "page": 1}).passed
        result = engine.json_fragment(users_document, {"name": "Linus"})
        assert result.failed
        assert '"name":"Linus"' in result.message

    def test_json_missing(self, engine, users_document):
        assert engine.json_missing(users_document, {"name": "Linus"}).passed
        result = engine.json_missing(users_document, {"id": 1})
        assert result.failed
        assert "Found unexpected JSON fragment" in result.message

    def test_json_structure(self, engine, users_document):
        assert engine.json_structure(users_document, {"data": {"*": ["id", "name"]}}).passed

    def test_json_structure_missing_key(self, engine, users_document):
        result = engine.json_structure(users_document, {"data": {"*": ["email"]}})
        assert result.failed
        assert result.path == "data.0"
        assert result.details["missing key"] == "email"

    def test_json_structure_shape_mismatch(self, engine, users_document):
        result = engine.json_structure(users_document, {"meta": {"*": ["id"]}})
        assert result.failed
        assert result.expected == "array"
        assert result.actual == "object"

    def test_json_structure_invalid_structure(self, engine):
        assert engine.json_structure({}, "id").status == AssertionStatus.ERROR

    def test_body_equals(self, engine):
        assert engine.body_equals('{"a": 1}', '{"a": 1}').passed
        assert engine.body_equals('{"a": 1}', b'{"a": 1}').passed
        assert engine.body_equals('{"a": 1}', "").passed
        assert engine.body_equals('{"a": 1}', '{"a": 2}').failed


class TestPathAssertions:
    """Tests for value checks by key path and JSONPath."""

    def test_exists_with_key_path(self, engine, users_document):
        assert engine.exists(users_document, "data.1.name").passed
        assert engine.exists(users_document, "data.2").failed

    def test_exists_with_jsonpath(self, engine, users_document):
        result = engine.exists(users_document, "$.data[*].id")
        assert result.passed
        assert result.actual == [1, 2]

    def test_missing(self, engine, users_document):
        assert engine.missing(users_document, "meta.next").passed
        assert engine.missing(users_document, "meta.total").failed

    def test_equals(self, engine, users_document):
        assert engine.equals(users_document, "meta.total", 2).passed
        result = engine.equals(users_document, "meta.total", "2")
        assert result.failed
        assert "Type mismatch" in result.details["hint"]

    def test_contains(self, engine, users_document):
        assert engine.contains(users_document, "data.0.roles", "admin").passed
        assert engine.contains(users_document, "data.0.name", "Ad").passed
        assert engine.contains(users_document, "meta", "total").passed
        assert engine.contains(users_document, "meta.total", 2).status == AssertionStatus.ERROR

    def test_lengths(self, engine, users_document):
        assert engine.length_eq(users_document, "data", 2).passed
        assert engine.length_gte(users_document, "$.data", 1).passed
        assert engine.length_lte(users_document, "data", 1).failed
        assert engine.length_eq(users_document, "meta", 2).passed

    def test_malformed_key_path_is_error(self, engine):
        result = engine.exists({"a": 1}, "a..b")
        assert result.status == AssertionStatus.ERROR
        assert result.message == "Invalid key path"

    def test_invalid_jsonpath_is_error(self, engine):
        result = engine.exists({"a": 1}, "$.[[")
        assert result.status == AssertionStatus.ERROR

    def test_custom_delimiter(self):
        engine = AssertionEngine(ProbeConfig(delimiter="/"))
        assert engine.equals({"a.b": {"c": 1}}, "a.b/c", 1).passed


class TestConvenienceFunctions:
    """Tests for module-level assertion helpers."""

    def test_helpers(self, users_document):
        assert assert_path_exists(users_document, "meta").passed
        assert assert_equals(users_document, "data.0.id", 1).passed
        assert assert_contains(users_document, "data.1.name", "Gra").passed
        assert assert_length_gte(users_document, "data", 2).passed
