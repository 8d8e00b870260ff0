"""Pydantic contracts for the query and filter tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QueryArguments(BaseModel):
    """Input contract for the query tool."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(description="Local path to the JSON file")
    json_path: str = Field(
        alias="jsonPath", description="JSONPath with extended syntax"
    )


class FilterArguments(BaseModel):
    """Input contract for the filter tool."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(description="Local path to the JSON file")
    json_path: str = Field(alias="jsonPath", description="JSONPath to the array")
    condition: str = Field(description="Condition like '@.price > 10'")


class ToolResult(BaseModel):
    """Outcome of a tool call.

    ``text`` holds the JSON rendering of ``result`` on success, or
    ``Error: <message>`` when ``is_error`` is set.
    """

    is_error: bool = False
    result: Any = None
    text: str = ""
