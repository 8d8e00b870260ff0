"""Elementwise numeric transforms: math(), round(), floor() and friends."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

from json_reader.core.errors import ArithmeticExpressionError
from json_reader.core.query.aggregation import coerce_number
from json_reader.core.query.arithmetic import apply_to_value
from json_reader.core.query.comparison import json_number

logger = logging.getLogger(__name__)

Number = int | float


def _round_half_up(value: Number) -> Number:
    # JavaScript Math.round: halves go towards +infinity
    return math.floor(value + 0.5)


def _sqrt(value: Number) -> Number | None:
    if value < 0:
        return None
    return math.sqrt(value)


TRANSFORMS: dict[str, Callable[[Number], Number | None]] = {
    "round": _round_half_up,
    "floor": math.floor,
    "ceil": math.ceil,
    "abs": abs,
    "sqrt": _sqrt,
    "pow2": lambda value: value * value,
}


def apply_math(values: list[Number], source: str) -> list[Number | None]:
    """Evaluate ``<value> <source>`` for each value; failures yield 0."""
    results: list[Number | None] = []
    for value in values:
        try:
            results.append(json_number(apply_to_value(value, source)))
        except ArithmeticExpressionError as e:
            logger.debug("math(%s) failed for %r: %s", source, value, e)
            results.append(0)
    return results


def apply_numeric_operation(
    data: list[Any], operation: str, argument: str | None = None
) -> list[Any]:
    """Apply one numeric operator to every element.

    Elements are coerced to numbers first (non-numeric values become 0).
    Results that overflow, or have no real value, are null.

    Args:
        data: Input elements. Never modified.
        operation: ``math`` or one of the names in ``TRANSFORMS``.
        argument: Arithmetic source for ``math``, e.g. ``* 1.1``.

    Returns:
        A new list. An unknown operation returns the coerced values.
    """
    values = [coerce_number(item) for item in data]

    if operation == "math":
        return apply_math(values, (argument or "").strip())

    transform = TRANSFORMS.get(operation)
    if transform is None:
        return values

    results: list[Number | None] = []
    for value in values:
        result = transform(value)
        results.append(None if result is None else json_number(result))
    return results
