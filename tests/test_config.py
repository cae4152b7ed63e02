from pathlib import Path

import pytest

from api_documentator.config import DocumentatorConfig, load_config
from api_documentator.errors import ConfigError

FIXTURES = Path(__file__).parent / "fixtures"


class TestDefaults:
    def test_defaults(self):
        config = DocumentatorConfig()
        assert config.openapi_version == "3.0.3"
        assert config.format == "simple"
        assert config.routes.include == ["api/*"]
        assert "sanctum/*" in config.routes.exclude
        assert config.security.default == ["bearerAuth"]
        assert config.output.path == "docs/openapi.json"
        assert config.type_map["integer"] == "integer"
        assert config.sanitize_utf8 is True

    def test_no_file_means_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == DocumentatorConfig()

    def test_default_file_is_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "documentator.yaml").write_text("format: json-api\n")
        assert load_config().format == "json-api"


class TestLoadConfig:
    def test_fixture(self):
        config = load_config(FIXTURES / "config.yaml")
        assert config.info.title == "Sample API"
        assert config.servers[1].variables["region"].enum == ["eu", "us"]
        assert config.routes.exclude_middleware == ["admin"]
        assert config.examples.seed == 42
        # integer status keys are normalized
        assert config.default_responses == {"500": {"description": "Server error"}}

    def test_single_security_scheme_string(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("security:\n  default: apiKey\n")
        assert load_config(path).security.default == ["apiKey"]

    def test_output_format_is_validated(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("output:\n  format: xml\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_output_format_is_case_insensitive(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("output:\n  format: YAML\n")
        assert load_config(path).output.format == "yaml"

    def test_collection_size_must_be_positive(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("examples:\n  collection_size: 0\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_broken_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("info: [unclosed\n")
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert load_config(path) == DocumentatorConfig()
