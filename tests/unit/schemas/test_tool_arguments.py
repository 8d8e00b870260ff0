"""Tests for tool argument contracts."""

import pytest
from pydantic import ValidationError

from json_reader.schemas.tool_arguments import (
    FilterArguments,
    QueryArguments,
    ToolResult,
)


class TestQueryArguments:
    """Test QueryArguments."""

    def test_accepts_wire_name(self) -> None:
        """jsonPath populates json_path."""
        args = QueryArguments.model_validate({"path": "a.json", "jsonPath": "$.x"})

        assert args.json_path == "$.x"

    def test_accepts_field_name(self) -> None:
        args = QueryArguments(path="a.json", json_path="$.x")

        assert args.model_dump(by_alias=True) == {"path": "a.json", "jsonPath": "$.x"}

    def test_requires_json_path(self) -> None:
        with pytest.raises(ValidationError):
            QueryArguments.model_validate({"path": "a.json"})


class TestFilterArguments:
    """Test FilterArguments."""

    def test_valid(self) -> None:
        args = FilterArguments.model_validate(
            {"path": "a.json", "jsonPath": "$.items", "condition": "@.n > 1"}
        )

        assert args.condition == "@.n > 1"

    def test_requires_condition(self) -> None:
        with pytest.raises(ValidationError):
            FilterArguments.model_validate({"path": "a.json", "jsonPath": "$"})

    def test_rejects_non_string(self) -> None:
        with pytest.raises(ValidationError):
            FilterArguments.model_validate(
                {"path": "a.json", "jsonPath": "$", "condition": 5}
            )


class TestToolResult:
    """Test ToolResult defaults."""

    def test_defaults(self) -> None:
        result = ToolResult()

        assert result.is_error is False
        assert result.result is None
        assert result.text == ""
