"""Unit tests for fixture-file loading, validation and options."""

import json
from pathlib import Path

from jsonprobe.config import DEFAULT_CONFIG, ProbeConfig, load_config
from jsonprobe.fixtures import load_fixture, load_structure, validate_fixture_yaml
from jsonprobe.validation import FixtureValidator


class TestLoadFixture:
    """Tests for load_fixture."""

    def test_loads_yaml_fixture(self, fixture_file):
        fixture, result = load_fixture(fixture_file)

        assert result.is_valid
        assert fixture.status == 200
        assert fixture.header("content-type") == "application/json"
        assert fixture["data.1.name"] == "Grace"

    def test_loads_json_fixture(self, tmp_path):
        path = tmp_path / "fixture.json"
        path.write_text(json.dumps({"status": 404, "body": {"error": "missing"}}))

        fixture, result = load_fixture(path)

        assert result.is_valid
        assert fixture.status == 404
        assert fixture.reason == "Not Found"
        assert fixture["error"] == "missing"

    def test_body_as_json_string(self, tmp_path):
        path = tmp_path / "fixture.yaml"
        path.write_text("body: '{\"a\": [1, 2]}'\n")

        fixture, result = load_fixture(path)
        assert result.is_valid
        assert fixture.get("a.1") == 2

    def test_missing_file(self, tmp_path):
        fixture, result = load_fixture(tmp_path / "nope.yaml")
        assert fixture is None
        assert "File not found" in str(result)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("body: [unclosed\n")

        fixture, result = load_fixture(path)
        assert fixture is None
        assert "Invalid YAML syntax" in str(result)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{")

        fixture, result = load_fixture(path)
        assert fixture is None
        assert "Invalid JSON syntax" in str(result)

    def test_invalid_utf8_is_reported(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"body:\n  name: \xff\n")

        fixture, result = load_fixture(path)
        assert fixture is None
        assert "not valid UTF-8" in str(result)

    def test_directory_is_reported(self, tmp_path):
        fixture, result = load_fixture(tmp_path)
        assert fixture is None
        assert "Not a file" in str(result)

    def test_structure_from_directory_is_reported(self, tmp_path):
        structure, result = load_structure(tmp_path)
        assert structure is None
        assert not result.is_valid

    def test_invalid_body_string(self, tmp_path):
        path = tmp_path / "fixture.yaml"
        path.write_text("body: 'not json'\n")

        fixture, result = load_fixture(path)
        assert fixture is None
        assert result.errors[0].path == "body"

    def test_config_is_passed_to_fixture(self, tmp_path):
        path = tmp_path / "fixture.yaml"
        path.write_text("body:\n  a.b:\n    c: 1\n")

        fixture, _ = load_fixture(path, ProbeConfig(delimiter="/"))
        assert fixture.get("a.b/c") == 1


class TestFixtureValidator:
    """Tests for FixtureValidator."""

    def test_requires_body(self):
        result = FixtureValidator({"status": 200}).validate()
        assert not result.is_valid
        assert "Required field 'body' is missing" in str(result)

    def test_unknown_top_level_field(self):
        result = FixtureValidator({"body": {}, "stauts": 200}).validate()
        assert result.errors[0].path == "stauts"
        assert "Valid fields are" in result.errors[0].suggestion

    def test_status_range(self):
        result = FixtureValidator({"body": {}, "status": 700}).validate()
        assert result.errors[0].path == "status"

    def test_status_type(self):
        result = FixtureValidator({"body": {}, "status": "200"}).validate()
        assert "Must be an integer" in str(result)

    def test_headers_must_be_mapping(self):
        result = FixtureValidator({"body": {}, "headers": ["a"]}).validate()
        assert result.errors[0].path == "headers"

    def test_header_values_must_be_strings(self):
        result = FixtureValidator({"body": {}, "headers": {"X-List": [1]}}).validate()
        assert result.errors[0].path == "headers.X-List"

    def test_body_scalar_rejected(self):
        result = FixtureValidator({"body": 5}).validate()
        assert result.errors[0].path == "body"

    def test_collects_several_errors(self):
        result = FixtureValidator(
            {"body": {}, "status": 1, "version": 2, "reason": 3}
        ).validate()
        assert [e.path for e in result.errors] == ["status", "version", "reason"]


class TestValidateFixtureYaml:
    """Tests for validate_fixture_yaml."""

    def test_valid(self):
        fixture, result = validate_fixture_yaml("status: 201\nbody:\n  id: 3\n")
        assert result.is_valid
        assert fixture["id"] == 3

    def test_non_string_keys_become_strings(self):
        fixture, result = validate_fixture_yaml("body:\n  200: ok\n  b: 1\n")

        assert result.is_valid
        assert fixture.has("200")
        assert fixture.json() == {"200": "ok", "b": 1}
        fixture.assert_exact_json({"b": 1, "200": "ok"})
        fixture.assert_json_fragment({"200": "ok"}).assert_json_missing({"200": "no"})

    def test_yaml_dates_become_text(self):
        fixture, result = validate_fixture_yaml("body:\n  created: 2024-01-02\n")

        assert result.is_valid
        assert fixture.get("created") == "2024-01-02"

    def test_not_a_mapping(self):
        fixture, result = validate_fixture_yaml("- a\n- b\n")
        assert fixture is None
        assert "Fixture must be an object" in str(result)


class TestLoadStructure:
    """Tests for load_structure."""

    def test_loads_structure(self, structure_file):
        structure, result = load_structure(structure_file)
        assert result.is_valid
        assert structure == {"data": {"*": ["id", "name"]}, "meta": ["total"]}

    def test_scalar_rejected(self, tmp_path):
        path = tmp_path / "structure.yaml"
        path.write_text("just text\n")

        structure, result = load_structure(path)
        assert structure is None
        assert "Structure must be an object or a list" in str(result)


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_options(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_text("delimiter: /\nmax_value_length: 40\n")

        config, result = load_config(path)
        assert result.is_valid
        assert config == ProbeConfig(delimiter="/", max_value_length=40)

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_text("")

        config, result = load_config(path)
        assert config == DEFAULT_CONFIG

    def test_unknown_option(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_text("separator: /\n")

        config, result = load_config(path)
        assert config is None
        assert "Unknown option 'separator'" in str(result)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_text("delimiter: ''\nindent: -1\n")

        config, result = load_config(path)
        assert config is None
        assert [e.path for e in result.errors] == ["delimiter", "indent"]

    def test_wildcard_must_differ_from_delimiter(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_text("delimiter: '*'\n")

        config, result = load_config(path)
        assert config is None
        assert result.errors[0].path == "wildcard"

    def test_unreadable_options_are_reported(self, tmp_path):
        path = tmp_path / "jsonprobe.yaml"
        path.write_bytes(b"delimiter: \xff\n")

        config, result = load_config(path)
        assert config is None
        assert "Cannot read options file" in str(result)

        config, result = load_config(tmp_path)
        assert config is None
        assert not result.is_valid

    def test_missing_file(self, tmp_path):
        config, result = load_config(Path(tmp_path / "nope.yaml"))
        assert config is None
        assert not result.is_valid
