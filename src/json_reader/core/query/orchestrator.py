"""Run extended queries and filters against an already-loaded document.

``run_query`` routes the expression, evaluates its base JSONPath and hands
the selection to the matching operator engine. ``run_filter`` evaluates a
plain JSONPath and applies a filter condition to the resulting array.
Neither function modifies ``document``.
"""

from __future__ import annotations

import logging
from typing import Any

from json_reader.core.query import base_selector
from json_reader.core.query.aggregation import apply_aggregation
from json_reader.core.query.array_ops import apply_array_operations
from json_reader.core.query.complex_filter import filter_items
from json_reader.core.query.date_ops import apply_date_operation
from json_reader.core.query.numeric_ops import apply_numeric_operation
from json_reader.core.query.router import (
    OperatorFamily,
    ParsedExtension,
    route,
)
from json_reader.core.query.string_ops import apply_string_operation

logger = logging.getLogger(__name__)


def document_length(document: Any) -> int:
    """Element count of an array, key count of an object, otherwise 0."""
    if isinstance(document, (list, dict)):
        return len(document)
    return 0


def _select_sequence(document: Any, parsed: ParsedExtension) -> list[Any]:
    if parsed.uses_whole_document:
        return base_selector.as_sequence(document)
    return base_selector.select_sequence(document, parsed.base_path)


def run_query(document: Any, expression: str) -> Any:
    """Evaluate an extended JSONPath expression.

    The operator the router picked runs with the router's argument; for
    the array family every array operator in the expression applies.

    Args:
        document: Parsed JSON document.
        expression: JSONPath, optionally followed by extension operators,
            e.g. ``$.store.book.sort(-price)[0:2]`` or ``$.items.sum(qty)``.

    Returns:
        A JSON-compatible value.

    Raises:
        BaseSelectorError: If the JSONPath portion is invalid.
        InvalidPatternError: If a matches() pattern does not compile.
    """
    parsed = route(expression)
    operation = parsed.kind.value

    if parsed.family is OperatorFamily.LENGTH:
        return document_length(document)

    if parsed.family is OperatorFamily.NONE:
        return base_selector.query(document, expression)

    if parsed.family is OperatorFamily.STRING:
        value = (
            document
            if parsed.uses_whole_document
            else base_selector.select_first(document, parsed.base_path)
        )
        return apply_string_operation(value, operation, parsed.argument)

    data = _select_sequence(document, parsed)
    logger.debug(
        "Applying %s to %d element(s) selected by %r",
        operation,
        len(data),
        parsed.base_path,
    )

    if parsed.family is OperatorFamily.AGGREGATION:
        return apply_aggregation(data, operation, parsed.argument)
    if parsed.family is OperatorFamily.NUMERIC:
        return apply_numeric_operation(data, operation, parsed.argument)
    if parsed.family is OperatorFamily.DATE:
        return apply_date_operation(data, operation, parsed.argument)
    return apply_array_operations(data, parsed.remainder)


def run_filter(document: Any, json_path: str, condition: str) -> list[Any]:
    """Filter the array selected by ``json_path`` with ``condition``.

    Selection follows the sequence engines: a singular path filters the
    array it names, any other path filters its list of matches.
    """
    data = base_selector.select_sequence(document, json_path)
    return filter_items(data, condition)
