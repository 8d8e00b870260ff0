"""String operators applied to a single selected value."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from json_reader.core.errors import InvalidPatternError


def regex_test(pattern: str, value: str) -> bool:
    """Search ``value`` for ``pattern``.

    Raises:
        InvalidPatternError: If the pattern does not compile.
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e
    return compiled.search(value) is not None


CASE_CONVERSIONS: dict[str, Callable[[str], str]] = {
    "toLowerCase": str.lower,
    "toUpperCase": str.upper,
}

PREDICATES: dict[str, Callable[[str, str], bool]] = {
    "contains": lambda value, arg: arg in value,
    "startsWith": lambda value, arg: value.startswith(arg),
    "endsWith": lambda value, arg: value.endswith(arg),
    "matches": lambda value, arg: regex_test(arg, value),
}


def apply_string_operation(
    value: Any, operation: str, argument: str | None = None
) -> Any:
    """Apply a string operator such as ``toUpperCase`` or ``contains``.

    Non-string values, unknown operators and predicates without an
    argument return ``value`` unchanged. Predicates are case-sensitive.
    """
    if not isinstance(value, str):
        return value

    convert = CASE_CONVERSIONS.get(operation)
    if convert is not None:
        return convert(value)

    predicate = PREDICATES.get(operation)
    if predicate is None or argument is None:
        return value
    return predicate(value, argument)
