import json
from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from api_documentator.cli import main
from api_documentator.errors import OutputError

FIXTURES = Path(__file__).parent / "fixtures"


def _generate(*args):
    runner = CliRunner()
    return runner.invoke(main, [
        "generate",
        "--config", str(FIXTURES / "config.yaml"),
        "--routes", str(FIXTURES / "routes.yaml"),
        *args,
    ])


class TestCliGenerate:
    def test_generate_json(self, tmp_path):
        output_file = tmp_path / "openapi.json"
        result = _generate("-o", str(output_file))

        assert result.exit_code == 0, result.output
        assert output_file.exists()
        spec = json.loads(output_file.read_text(encoding="utf-8"))
        assert spec["info"]["title"] == "Sample API"
        assert "/api/users" in spec["paths"]

    def test_progress_and_summary(self, tmp_path):
        result = _generate("-o", str(tmp_path / "openapi.json"))

        assert "Generating OpenAPI specification..." in result.output
        assert "/api/users/{user}" in result.output
        assert "GET,POST" not in result.output
        assert "PUT,PATCH" in result.output
        assert "Generated successfully" in result.output
        assert "Format:           simple" in result.output
        assert "Routes:           11" in result.output
        assert "Endpoints:        7" in result.output
        assert "Schemas:          6" in result.output
        assert "Responses:        7" in result.output
        assert "Security schemes: 1" in result.output
        assert "Tags:             6" in result.output
        assert " KB" in result.output

    def test_yaml_output_and_format_override(self, tmp_path):
        output_file = tmp_path / "openapi.yaml"
        result = _generate("-o", str(output_file), "--output-format", "yaml", "--format", "json-api")

        assert result.exit_code == 0, result.output
        spec = yaml.safe_load(output_file.read_text(encoding="utf-8"))
        assert "JsonApiDocument" in spec["components"]["schemas"]
        assert "Format:           json-api" in result.output

    def test_seed_gives_identical_files(self, tmp_path):
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        _generate("-o", str(first), "--seed", "7")
        _generate("-o", str(second), "--seed", "7")
        assert first.read_bytes() == second.read_bytes()

    def test_output_path_from_config(self, tmp_path):
        runner = CliRunner()
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, [
                "generate",
                "--config", str(FIXTURES / "config.yaml"),
                "--routes", str(FIXTURES / "routes.yaml"),
            ])
            assert result.exit_code == 0, result.output
            assert Path("build/openapi.json").exists()

    def test_verbose_flag(self, tmp_path):
        result = _generate("-o", str(tmp_path / "openapi.json"), "--verbose")
        assert result.exit_code == 0, result.output


class TestCliErrors:
    def test_unknown_format(self, tmp_path):
        result = _generate("-o", str(tmp_path / "openapi.json"), "--format", "xml")

        assert result.exit_code == 1
        assert "Unknown format: xml. Available: simple, json-api" in result.output
        assert not (tmp_path / "openapi.json").exists()

    def test_missing_route_manifest(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            "generate",
            "--config", str(FIXTURES / "config.yaml"),
            "--routes", str(tmp_path / "missing.yaml"),
        ])
        assert result.exit_code == 1
        assert "Cannot read route manifest" in result.output

    def test_missing_config_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "--config", str(tmp_path / "nope.yaml")])
        assert result.exit_code != 0

    @patch("api_documentator.cli.write_document")
    def test_write_failure(self, mock_write, tmp_path):
        mock_write.side_effect = OutputError("Failed to write: openapi.json: disk full")
        result = _generate("-o", str(tmp_path / "openapi.json"))

        assert result.exit_code == 1
        assert "Error: Failed to write" in result.output
        assert "Generated successfully" not in result.output
