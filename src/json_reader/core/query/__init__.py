"""Extended JSONPath query and filter engine."""

from json_reader.core.query.orchestrator import run_filter, run_query
from json_reader.core.query.router import (
    OperatorFamily,
    OperatorKind,
    ParsedExtension,
    route,
)

__all__ = [
    "OperatorFamily",
    "OperatorKind",
    "ParsedExtension",
    "route",
    "run_filter",
    "run_query",
]
