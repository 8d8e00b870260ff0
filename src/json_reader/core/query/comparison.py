"""JavaScript-style coercion and comparison over JSON values.

Sorting and filtering compare raw JSON values the way the query language
has always done: strings compare lexicographically with each other, every
other pairing is compared numerically after coercion, and ``==`` is loose
equality. Python's own operators raise on mixed types, so the rules are
spelled out here explicitly.
"""

from __future__ import annotations

import math
import re
from typing import Any

_DECIMAL_LITERAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class _Undefined:
    """Marker for a field that is absent, as opposed to present and null."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def read_field(item: Any, field: str) -> Any:
    """Read ``field`` off an element; non-objects and absent keys are undefined."""
    if isinstance(item, dict) and field in item:
        return item[field]
    return UNDEFINED


def is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


def to_js_string(value: Any) -> str:
    """String form of a value following JavaScript's String()."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ",".join("" if is_nullish(v) else to_js_string(v) for v in value)
    return "[object Object]"


def to_number(value: Any) -> float:
    """Numeric form of a value following JavaScript's Number().

    Unconvertible values become NaN.
    """
    if value is UNDEFINED:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        if not _DECIMAL_LITERAL.match(text):
            return math.nan
        return float(text)
    if isinstance(value, list):
        return to_number(to_js_string(value))
    return math.nan


def _to_primitive(value: Any) -> Any:
    if isinstance(value, (list, dict)):
        return to_js_string(value)
    return value


def json_number(value: int | float) -> int | float | None:
    """Number as JSON.stringify emits it.

    Integral floats become ints; NaN and infinities become null.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def _less_than(left: Any, right: Any) -> bool:
    left = _to_primitive(left)
    right = _to_primitive(right)
    if isinstance(left, str) and isinstance(right, str):
        return left < right
    left_num = to_number(left)
    right_num = to_number(right)
    if math.isnan(left_num) or math.isnan(right_num):
        return False
    return left_num < right_num


def js_greater_than(left: Any, right: Any) -> bool:
    return _less_than(right, left)


def js_less_than(left: Any, right: Any) -> bool:
    return _less_than(left, right)


def js_greater_equal(left: Any, right: Any) -> bool:
    # a >= b is !(a < b), except that NaN makes every ordering false
    if _has_nan(left, right):
        return False
    return not _less_than(left, right)


def js_less_equal(left: Any, right: Any) -> bool:
    if _has_nan(left, right):
        return False
    return not _less_than(right, left)


def _has_nan(left: Any, right: Any) -> bool:
    left = _to_primitive(left)
    right = _to_primitive(right)
    if isinstance(left, str) and isinstance(right, str):
        return False
    return math.isnan(to_number(left)) or math.isnan(to_number(right))


def strict_equals(left: Any, right: Any) -> bool:
    """JavaScript ``===`` over JSON values."""
    if is_nullish(left) or is_nullish(right):
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return float(left) == float(right)
    if isinstance(left, (list, dict)) or isinstance(right, (list, dict)):
        return left is right
    return type(left) is type(right) and left == right


def loose_equals(left: Any, right: Any) -> bool:
    """JavaScript ``==`` over JSON values."""
    if is_nullish(left) or is_nullish(right):
        return is_nullish(left) and is_nullish(right)
    if isinstance(left, (list, dict)) and isinstance(right, (list, dict)):
        return left is right
    if isinstance(left, (list, dict)):
        return loose_equals(_to_primitive(left), right)
    if isinstance(right, (list, dict)):
        return loose_equals(left, _to_primitive(right))
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    left_num = to_number(left)
    right_num = to_number(right)
    if math.isnan(left_num) or math.isnan(right_num):
        return False
    return left_num == right_num


COMPARATORS = {
    ">": js_greater_than,
    ">=": js_greater_equal,
    "<": js_less_than,
    "<=": js_less_equal,
    "==": loose_equals,
    "!=": lambda left, right: not loose_equals(left, right),
}
