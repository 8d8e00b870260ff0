"""Tests for reader settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from json_reader.core.config.settings import (
    CONFIG_ENV_VAR,
    ReaderSettings,
    load_settings,
)
from json_reader.core.errors import ConfigurationError

_ENV_VARS = (
    CONFIG_ENV_VAR,
    "MCP_JSON_READER_BASE_DIR",
    "MCP_JSON_READER_MAX_FILE_BYTES",
    "MCP_JSON_READER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate each test from the caller's environment and working directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestReaderSettings:
    """Test the settings model."""

    def test_defaults(self) -> None:
        settings = ReaderSettings()

        assert settings.max_file_bytes == 10_000_000
        assert settings.cache_enabled is True
        assert settings.log_level == "WARNING"
        assert settings.resolve_base_dir() == Path.cwd().resolve()

    def test_log_level_normalised(self) -> None:
        assert ReaderSettings(log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(ValueError):
            ReaderSettings(log_level="chatty")

    def test_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError):
            ReaderSettings(colour="blue")  # type: ignore[call-arg]


class TestLoadSettings:
    """Test load_settings() lookup and overrides."""

    def test_no_file_gives_defaults(self) -> None:
        assert load_settings() == ReaderSettings()

    def test_explicit_file(self, tmp_path: Path) -> None:
        config = tmp_path / "reader.yaml"
        config.write_text(
            "base_dir: /data\nmax_file_bytes: 2048\ncache_enabled: false\n"
        )

        settings = load_settings(config)

        assert settings.base_dir == Path("/data")
        assert settings.max_file_bytes == 2048
        assert settings.cache_enabled is False

    def test_env_config_path(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = tmp_path / "env.yaml"
        config.write_text("log_level: info\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

        assert load_settings().log_level == "INFO"

    def test_local_config_file(self, tmp_path: Path) -> None:
        local = tmp_path / ".mcp-json-reader"
        local.mkdir()
        (local / "config.yaml").write_text("server_name: local-reader\n")

        assert load_settings().server_name == "local-reader"

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config = tmp_path / "reader.yaml"
        config.write_text("max_file_bytes: 2048\n")
        monkeypatch.setenv("MCP_JSON_READER_MAX_FILE_BYTES", "4096")
        monkeypatch.setenv("MCP_JSON_READER_BASE_DIR", str(tmp_path))

        settings = load_settings(config)

        assert settings.max_file_bytes == 4096
        assert settings.base_dir == tmp_path

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Failed to load settings"):
            load_settings(tmp_path / "absent.yaml")

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        config = tmp_path / "list.yaml"
        config.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_settings(config)

    def test_invalid_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MCP_JSON_READER_MAX_FILE_BYTES", "lots")

        with pytest.raises(ConfigurationError, match="Invalid settings"):
            load_settings()
