"""Aggregation operators: sum, avg, min and max over a field."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any

from json_reader.core.errors import EmptyInputError
from json_reader.core.query.comparison import json_number, read_field, to_number


def coerce_number(value: Any) -> int | float:
    """Use numbers as-is; parse anything else, falling back to 0.

    NaN and infinities also become 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    number = value if isinstance(value, float) else to_number(value)
    if not math.isfinite(number):
        return 0
    return number


def field_values(data: list[Any], field: str) -> list[int | float]:
    return [coerce_number(read_field(item, field)) for item in data]


def total(data: list[Any], field: str) -> int | float:
    return sum(field_values(data, field))


def average(data: list[Any], field: str) -> float:
    """Mean of a field.

    Raises:
        EmptyInputError: If ``data`` is empty.
    """
    if not data:
        raise EmptyInputError(f"Cannot average field '{field}' of an empty array")
    return total(data, field) / len(data)


def minimum(data: list[Any], field: str) -> int | float:
    return min(field_values(data, field))


def maximum(data: list[Any], field: str) -> int | float:
    return max(field_values(data, field))


AGGREGATORS: dict[str, Callable[[list[Any], str], int | float]] = {
    "sum": total,
    "avg": average,
    "min": minimum,
    "max": maximum,
}


def apply_aggregation(
    data: Any, operation: str, field: str | None = None
) -> int | float | None:
    """Aggregate ``field`` over ``data``.

    Args:
        data: Selected elements.
        operation: One of ``sum``, ``avg``, ``min`` or ``max``.
        field: Field read from each element.

    Returns:
        The aggregate, or 0 for anything that is not a non-empty list, a
        missing field or an unknown operation. An overflowing result is
        null.
    """
    aggregate = AGGREGATORS.get(operation)
    if aggregate is None or not field:
        return 0
    if not isinstance(data, list) or not data:
        return 0
    return json_number(aggregate(data, field.strip()))
