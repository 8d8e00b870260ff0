"""Argument and result contracts for the MCP tools."""

from .tool_arguments import FilterArguments, QueryArguments, ToolResult

__all__ = [
    "FilterArguments",
    "QueryArguments",
    "ToolResult",
]
