"""Classify extended expressions and split off their base JSONPath.

An extended expression is a standard JSONPath followed by one family of
extension operators, e.g. ``$.store.book.sort(-price)[0:2]``. The router
decides which family applies, using a fixed precedence, and returns the
base path to evaluate first together with the operator text that follows.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

LENGTH_EXPRESSION = "$.length()"
ROOT_PATH = "$"


class OperatorFamily(Enum):
    """Operator families in routing precedence order."""

    LENGTH = "length"
    AGGREGATION = "aggregation"
    NUMERIC = "numeric"
    DATE = "date"
    ARRAY = "array"
    STRING = "string"
    NONE = "none"


class OperatorKind(Enum):
    """Individual extension operators."""

    SORT = "sort"
    DISTINCT = "distinct"
    REVERSE = "reverse"
    SLICE = "slice"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    MATH = "math"
    ROUND = "round"
    FLOOR = "floor"
    CEIL = "ceil"
    ABS = "abs"
    SQRT = "sqrt"
    POW2 = "pow2"
    FORMAT = "format"
    IS_TODAY = "isToday"
    TO_LOWER = "toLowerCase"
    TO_UPPER = "toUpperCase"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    CONTAINS = "contains"
    MATCHES = "matches"
    LENGTH = "length"
    NONE = "none"


@dataclass(frozen=True)
class ParsedExtension:
    """Routing decision for one expression.

    ``kind`` is the first operator of the family in the expression and is
    the one that runs; ``args`` holds its unquoted argument. Only the array
    family combines several operators, which the array engine reads back
    from ``remainder``.
    """

    base_path: str
    family: OperatorFamily
    kind: OperatorKind
    remainder: str
    args: tuple[str, ...] = ()

    @property
    def uses_whole_document(self) -> bool:
        """True when the base path selects the document root."""
        return self.base_path.strip() in ("", ROOT_PATH)

    @property
    def argument(self) -> str | None:
        return self.args[0] if self.args else None


def _family_pattern(names: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\.(" + "|".join(names) + r")\(")


_AGGREGATION_OPS = ("sum", "avg", "min", "max")
_NUMERIC_OPS = ("math", "round", "floor", "ceil", "abs", "sqrt", "pow2")
_DATE_OPS = ("format", "isToday")
_ARRAY_OPS = ("sort", "distinct", "reverse")
_STRING_OPS = (
    "toLowerCase",
    "toUpperCase",
    "startsWith",
    "endsWith",
    "contains",
    "matches",
)

_FAMILY_PATTERNS: tuple[tuple[OperatorFamily, re.Pattern[str]], ...] = (
    (OperatorFamily.AGGREGATION, _family_pattern(_AGGREGATION_OPS)),
    (OperatorFamily.NUMERIC, _family_pattern(_NUMERIC_OPS)),
    (OperatorFamily.DATE, _family_pattern(_DATE_OPS)),
    (OperatorFamily.ARRAY, _family_pattern(_ARRAY_OPS)),
    (OperatorFamily.STRING, _family_pattern(_STRING_OPS)),
)

SLICE_PATTERN = re.compile(r"\.?\[(-?\d*):(-?\d*)\]")
_TRAILING_SLICE_PATTERN = re.compile(r"\.?\[(-?\d*):(-?\d*)\]\s*$")

_QUOTES = "'\""


def _kind_for(name: str) -> OperatorKind:
    return OperatorKind(name)


def _operator_argument(remainder: str) -> str | None:
    """Text inside the first operator's parentheses, honouring nesting.

    Parentheses inside quotes do not count. Returns None when the
    parentheses never close.
    """
    start = remainder.find("(")
    if start < 0:
        return None
    depth = 0
    quote: str | None = None
    for index in range(start, len(remainder)):
        char = remainder[index]
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return remainder[start + 1 : index]
    return None


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


def _extract_args(remainder: str) -> tuple[str, ...]:
    raw = _operator_argument(remainder)
    if raw is None or not raw.strip():
        return ()
    return (_unquote(raw),)


def route(expression: str) -> ParsedExtension:
    """Route an expression to exactly one operator family.

    Precedence: length, aggregation, numeric, date, array, string, plain.

    Args:
        expression: Extended JSONPath expression.

    Returns:
        Parsed extension with the base path and operator remainder.
    """
    if expression.strip() == LENGTH_EXPRESSION:
        return ParsedExtension(
            base_path=ROOT_PATH,
            family=OperatorFamily.LENGTH,
            kind=OperatorKind.LENGTH,
            remainder="",
        )

    for family, pattern in _FAMILY_PATTERNS:
        match = pattern.search(expression)
        if family is OperatorFamily.ARRAY:
            parsed = _route_array(expression, match)
            if parsed is not None:
                return parsed
            continue
        if match is None:
            continue
        base_path = expression[: match.start()]
        remainder = expression[match.start() :]
        parsed = ParsedExtension(
            base_path=base_path,
            family=family,
            kind=_kind_for(match.group(1)),
            remainder=remainder,
            args=_extract_args(remainder),
        )
        logger.debug("Routed %r to %s", expression, parsed.kind.value)
        return parsed

    return ParsedExtension(
        base_path=expression,
        family=OperatorFamily.NONE,
        kind=OperatorKind.NONE,
        remainder="",
    )


def _route_array(
    expression: str, op_match: re.Match[str] | None
) -> ParsedExtension | None:
    """Route the array family, where a trailing slice also qualifies."""
    slice_match = _TRAILING_SLICE_PATTERN.search(expression)
    if op_match is None and slice_match is None:
        return None

    starts = [m.start() for m in (op_match, slice_match) if m is not None]
    split_at = min(starts)
    remainder = expression[split_at:]

    if op_match is not None and op_match.start() == split_at:
        kind = _kind_for(op_match.group(1))
    else:
        kind = OperatorKind.SLICE

    logger.debug("Routed %r to array operations", expression)
    return ParsedExtension(
        base_path=expression[:split_at],
        family=OperatorFamily.ARRAY,
        kind=kind,
        remainder=remainder,
        args=_extract_args(remainder) if kind is not OperatorKind.SLICE else (),
    )
