"""MCP server exposing the query and filter tools using the FastMCP SDK."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import ValidationError

from json_reader.core.config.settings import ReaderSettings
from json_reader.core.documents.loader import DocumentCache
from json_reader.core.errors import JsonReaderError
from json_reader.core.query.orchestrator import run_filter, run_query
from json_reader.schemas.tool_arguments import (
    FilterArguments,
    QueryArguments,
    ToolResult,
)

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"


def render_result(result: Any) -> str:
    """Render a tool result as indented JSON text."""
    return json.dumps(result, indent=2, ensure_ascii=False)


def _error_message(error: Exception) -> str:
    if isinstance(error, ValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in error.errors()
        )
        return f"Invalid arguments: {problems}"
    return str(error)


class JsonReaderServer:
    """MCP server for querying local JSON files.

    Documents are loaded through a shared DocumentCache, so repeated
    queries against an unchanged file parse it only once.
    """

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        document_cache: DocumentCache | None = None,
    ) -> None:
        """Initialize MCP server.

        Args:
            settings: Reader settings. Uses defaults if None.
            document_cache: Document cache. Created from settings if None.
        """
        self.settings = settings or ReaderSettings()
        self.document_cache = document_cache or DocumentCache(self.settings)
        self._mcp = FastMCP(self.settings.server_name)
        self._setup_tools()

    def _setup_tools(self) -> None:
        """Register MCP tools with FastMCP."""

        @self._mcp.tool(name="query")
        async def query(path: str, jsonPath: str) -> str:  # noqa: N803
            """Query a local JSON file with extended JSONPath.

            Supports sort, distinct, reverse, slicing, sum/avg/min/max,
            math and rounding, string predicates and date formatting.

            Args:
                path: Local path to the JSON file
                jsonPath: JSONPath with extended syntax
            """
            outcome = await self._query_tool({"path": path, "jsonPath": jsonPath})
            if outcome.is_error:
                raise ToolError(outcome.text)
            return outcome.text

        @self._mcp.tool(name="filter")
        async def filter_array(
            path: str,
            jsonPath: str,  # noqa: N803
            condition: str,
        ) -> str:
            """Filter an array in a local JSON file.

            Args:
                path: Local path to the JSON file
                jsonPath: JSONPath to the array
                condition: Condition like '@.price > 10'
            """
            outcome = await self._filter_tool(
                {"path": path, "jsonPath": jsonPath, "condition": condition}
            )
            if outcome.is_error:
                raise ToolError(outcome.text)
            return outcome.text

    async def handle_initialize(self) -> dict[str, Any]:
        """Handle MCP initialize request.

        Returns:
            Initialization response with capabilities.
        """
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {},
            },
            "serverInfo": {
                "name": self.settings.server_name,
                "version": self._get_version(),
            },
        }

    def _get_version(self) -> str:
        """Get package version."""
        try:
            from importlib.metadata import version

            return version("mcp-json-reader")
        except Exception:
            return "1.1.0"  # Fallback

    async def list_tools(self) -> list[dict[str, Any]]:
        """List available MCP tools.

        Returns:
            List of tool definitions.
        """
        return [
            {
                "name": "query",
                "description": (
                    "Query a local JSON file with extended JSONPath "
                    "(sort, sum, math, etc.)"
                ),
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "jsonPath": {"type": "string"},
                    },
                    "required": ["path", "jsonPath"],
                },
            },
            {
                "name": "filter",
                "description": "Filter an array in a local JSON file",
                "inputSchema": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "jsonPath": {"type": "string"},
                        "condition": {"type": "string"},
                    },
                    "required": ["path", "jsonPath", "condition"],
                },
            },
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """Call an MCP tool.

        Args:
            name: Tool name.
            arguments: Tool arguments.

        Returns:
            MCP tool response with text content and an ``isError`` flag.

        Raises:
            ValueError: If tool not found.
        """
        if name == "query":
            outcome = await self._query_tool(arguments)
        elif name == "filter":
            outcome = await self._filter_tool(arguments)
        else:
            raise ValueError(f"Tool not found: {name}")

        return {
            "content": [{"type": "text", "text": outcome.text}],
            "isError": outcome.is_error,
        }

    async def _query_tool(self, arguments: dict[str, Any]) -> ToolResult:
        """Execute query tool.

        Args:
            arguments: Tool arguments including path and jsonPath.

        Returns:
            Query outcome; failures are reported, not raised.
        """
        try:
            args = QueryArguments.model_validate(arguments)
            document = self.document_cache.load(args.path)
            result = run_query(document, args.json_path)
        except (JsonReaderError, ValidationError) as e:
            return self._failure("query", e)
        except Exception as e:
            logger.exception("Unexpected error in query tool")
            return self._failure("query", e)
        return ToolResult(result=result, text=render_result(result))

    async def _filter_tool(self, arguments: dict[str, Any]) -> ToolResult:
        """Execute filter tool.

        Args:
            arguments: Tool arguments including path, jsonPath and condition.

        Returns:
            Filter outcome; failures are reported, not raised.
        """
        try:
            args = FilterArguments.model_validate(arguments)
            document = self.document_cache.load(args.path)
            result = run_filter(document, args.json_path, args.condition)
        except (JsonReaderError, ValidationError) as e:
            return self._failure("filter", e)
        except Exception as e:
            logger.exception("Unexpected error in filter tool")
            return self._failure("filter", e)
        return ToolResult(result=result, text=render_result(result))

    def _failure(self, tool: str, error: Exception) -> ToolResult:
        message = _error_message(error)
        logger.info("%s tool failed: %s", tool, message)
        return ToolResult(is_error=True, text=f"Error: {message}")

    def run(
        self, transport: str = "stdio", host: str = "127.0.0.1", port: int = 8080
    ) -> None:
        """Run the MCP server.

        Args:
            transport: Transport type ('stdio' or 'http').
            host: Host for HTTP transport.
            port: Port for HTTP transport.
        """
        if transport == "http":
            import uvicorn

            app = self._mcp.sse_app()
            uvicorn.run(app, host=host, port=port)
        else:
            self._mcp.run()
