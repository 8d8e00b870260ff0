"""Array operators: sort, distinct, reverse and slice."""

from __future__ import annotations

import json
import re
from functools import cmp_to_key
from typing import Any

from json_reader.core.query.comparison import (
    is_nullish,
    js_greater_than,
    read_field,
    strict_equals,
)
from json_reader.core.query.router import SLICE_PATTERN

_SORT_PATTERN = re.compile(r"\.sort\((-?\w+)\)")
_DISTINCT_TOKEN = ".distinct()"
_REVERSE_TOKEN = ".reverse()"


def sort_items(
    items: list[Any], field: str, descending: bool = False
) -> list[Any]:
    """Sort elements by a field, placing null or missing values last.

    Python's sort is stable, so equal elements keep their relative order.
    """

    def compare(a: Any, b: Any) -> int:
        a_val = read_field(a, field)
        b_val = read_field(b, field)
        a_null = is_nullish(a_val)
        b_null = is_nullish(b_val)
        if a_null and b_null:
            return 0
        if a_null:
            return 1
        if b_null:
            return -1
        if strict_equals(a_val, b_val):
            return 0
        if descending:
            return 1 if js_greater_than(b_val, a_val) else -1
        return 1 if js_greater_than(a_val, b_val) else -1

    return sorted(items, key=cmp_to_key(compare))


def _normalise_numbers(item: Any) -> Any:
    # 1 and 1.0 are the same JSON number
    if isinstance(item, float) and item.is_integer():
        return int(item)
    if isinstance(item, list):
        return [_normalise_numbers(value) for value in item]
    if isinstance(item, dict):
        return {key: _normalise_numbers(value) for key, value in item.items()}
    return item


def _canonical(item: Any) -> str:
    return json.dumps(
        _normalise_numbers(item), sort_keys=True, separators=(",", ":"), default=str
    )


def distinct_items(items: list[Any]) -> list[Any]:
    """Drop structural duplicates, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Any] = []
    for item in items:
        key = _canonical(item)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def reverse_items(items: list[Any]) -> list[Any]:
    return items[::-1]


def slice_items(
    items: list[Any], start: int | None = None, end: int | None = None
) -> list[Any]:
    """Half-open slice; bounds clamp the way list slicing does."""
    return items[start:end]


def _parse_bound(text: str) -> int | None:
    if text in ("", "-"):
        return None
    return int(text)


def apply_array_operations(data: list[Any], expression: str) -> list[Any]:
    """Apply every array operator present in ``expression``.

    Operators run in a fixed order regardless of how they are written:
    sort, distinct, reverse, slice.

    Args:
        data: Input elements. Never modified.
        expression: Operator text, e.g. ``.sort(-price).reverse()[0:2]``.

    Returns:
        A new list.
    """
    result = list(data)

    sort_match = _SORT_PATTERN.search(expression)
    if sort_match:
        field = sort_match.group(1)
        descending = field.startswith("-")
        result = sort_items(result, field.lstrip("-"), descending=descending)

    if _DISTINCT_TOKEN in expression:
        result = distinct_items(result)

    if _REVERSE_TOKEN in expression:
        result = reverse_items(result)

    slice_match = SLICE_PATTERN.search(expression)
    if slice_match:
        result = slice_items(
            result,
            _parse_bound(slice_match.group(1)),
            _parse_bound(slice_match.group(2)),
        )

    return result
