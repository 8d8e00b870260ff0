"""Tests for CLI interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from json_reader.cli import cli


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's settings file and environment out of CLI runs."""
    for name in (
        "MCP_JSON_READER_CONFIG",
        "MCP_JSON_READER_BASE_DIR",
        "MCP_JSON_READER_MAX_FILE_BYTES",
        "MCP_JSON_READER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestCLI:
    """Test CLI interface."""

    def test_cli_help(self):
        """Test that CLI shows help message."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "extended jsonpath" in result.output.lower()

    def test_cli_commands_exist(self):
        """Test that serve, query and filter commands exist."""
        runner = CliRunner()
        for command in ("serve", "query", "filter"):
            result = runner.invoke(cli, [command, "--help"])
            assert result.exit_code == 0

    def test_query_outputs_json(self, store_file):
        """Test query prints the result as JSON."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["query", str(store_file), "$.store.book.max(price)"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == 22.99

    def test_query_relative_to_working_directory(self, store_file):
        """Test relative paths resolve against the working directory."""
        runner = CliRunner()
        result = runner.invoke(cli, ["query", store_file.name, "$.length()"])
        assert result.exit_code == 0
        assert json.loads(result.output) == 3

    def test_query_pretty(self, store_file):
        """Test --pretty still prints valid JSON."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["query", str(store_file), "$.owner.toLowerCase()", "--pretty"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == "jane smith"

    def test_filter_outputs_matches(self, store_file):
        """Test filter prints matching elements."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["filter", str(store_file), "$.store.book", "@.price < 9"]
        )
        assert result.exit_code == 0
        titles = [book["title"] for book in json.loads(result.output)]
        assert titles == ["Sayings of the Century", "Moby Dick"]

    def test_query_missing_file_fails(self, tmp_path):
        """Test a missing file reports an error and exits non-zero."""
        runner = CliRunner()
        result = runner.invoke(cli, ["query", str(tmp_path / "none.json"), "$"])
        assert result.exit_code == 1
        assert "Failed to read or parse JSON file" in result.output

    def test_invalid_settings_file_fails(self, tmp_path, store_file):
        """Test an invalid settings file stops the command."""
        config = tmp_path / "bad.yaml"
        config.write_text("max_file_bytes: -1\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "query", str(store_file), "$"]
        )
        assert result.exit_code == 1
        assert "Invalid settings" in result.output

    def test_settings_size_limit_applies(self, tmp_path, store_file):
        """Test settings from --config reach the document loader."""
        config = tmp_path / "small.yaml"
        config.write_text("max_file_bytes: 5\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(config), "query", str(store_file), "$"]
        )
        assert result.exit_code == 1
        assert "limit is 5" in result.output
