"""MCP transport for the JSON reader tools."""
