"""Reader settings loaded from YAML with environment overrides.

Lookup order for the settings file: explicit path, then
``$MCP_JSON_READER_CONFIG``, then ``.mcp-json-reader/config.yaml`` in the
working directory. Environment variables override file values.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from json_reader.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MCP_JSON_READER_CONFIG"
LOCAL_CONFIG_PATH = Path(".mcp-json-reader") / "config.yaml"

_ENV_OVERRIDES = {
    "MCP_JSON_READER_BASE_DIR": "base_dir",
    "MCP_JSON_READER_MAX_FILE_BYTES": "max_file_bytes",
    "MCP_JSON_READER_LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ReaderSettings(BaseModel):
    """Settings shared by the MCP server and the CLI."""

    model_config = ConfigDict(extra="forbid")

    base_dir: Path | None = None
    max_file_bytes: int = Field(default=10_000_000, gt=0)
    cache_enabled: bool = True
    log_level: str = "WARNING"
    server_name: str = "mcp-json-reader"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def resolve_base_dir(self) -> Path:
        """Directory that relative document paths are resolved against."""
        return (self.base_dir or Path.cwd()).expanduser().resolve()


def _find_config_file(config_path: str | Path | None) -> Path | None:
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    if LOCAL_CONFIG_PATH.exists():
        return LOCAL_CONFIG_PATH
    return None


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load settings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    return data


def load_settings(config_path: str | Path | None = None) -> ReaderSettings:
    """Load settings from file and environment.

    Args:
        config_path: Explicit settings file. Must exist when given.

    Returns:
        Validated settings.

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid.
    """
    values: dict[str, Any] = {}
    path = _find_config_file(config_path)
    if path is not None:
        logger.debug("Loading settings from %s", path)
        values.update(_read_config_file(path))

    for env_var, key in _ENV_OVERRIDES.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[key] = env_value

    try:
        return ReaderSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
