"""MCP JSON Reader - query local JSON files with extended JSONPath."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("mcp-json-reader")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
