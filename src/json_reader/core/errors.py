"""Error types raised by the query engine and its collaborators.

All errors extend JsonReaderError so the MCP layer and the CLI can
convert any failure into a single error payload.
"""


class JsonReaderError(Exception):
    """Base error for all json_reader failures."""


class DocumentLoadError(JsonReaderError):
    """A JSON document could not be read, was too large, or did not parse."""

    def __init__(self, path: str, cause: str) -> None:
        super().__init__(f"Failed to read or parse JSON file at {path}: {cause}")
        self.path = path
        self.cause = cause


class ConfigurationError(JsonReaderError):
    """Settings file or environment override is invalid."""


class BaseSelectorError(JsonReaderError):
    """The standard JSONPath portion of an expression failed to evaluate."""

    def __init__(self, json_path: str, cause: str) -> None:
        super().__init__(f"Invalid JSONPath '{json_path}': {cause}")
        self.json_path = json_path


class InvalidPatternError(JsonReaderError):
    """A regular expression supplied to matches() did not compile."""

    def __init__(self, pattern: str, cause: str) -> None:
        super().__init__(f"Invalid regular expression '{pattern}': {cause}")
        self.pattern = pattern


class EmptyInputError(JsonReaderError):
    """An aggregation that needs at least one element received none."""


class ArithmeticExpressionError(JsonReaderError):
    """The arithmetic evaluator rejected or could not evaluate its input."""

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position
