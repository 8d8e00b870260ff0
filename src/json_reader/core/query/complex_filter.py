"""Condition filter for arrays, e.g. ``@.price > 10`` or ``@.title.contains('x')``."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from json_reader.core.query.comparison import (
    COMPARATORS,
    is_nullish,
    read_field,
    to_js_string,
    to_number,
)
from json_reader.core.query.string_ops import PREDICATES

logger = logging.getLogger(__name__)

STRING_PREDICATES = tuple(PREDICATES)

_PREDICATE_PATTERNS = {
    name: re.compile(r"@\.(\w+)\." + name + r"\(['\"](.+?)['\"]\)")
    for name in STRING_PREDICATES
}
_COMPARISON_PATTERN = re.compile(r"@\.(\w+)\s*([><=!]+)\s*(.+)")


@dataclass(frozen=True)
class StringPredicate:
    """``@.field.predicate('argument')``."""

    field: str
    predicate: str
    argument: str

    def test(self, item: Any) -> bool:
        raw = read_field(item, self.field)
        value = "" if is_nullish(raw) else to_js_string(raw)
        return PREDICATES[self.predicate](value, self.argument)


@dataclass(frozen=True)
class Comparison:
    """``@.field <comparator> literal``."""

    field: str
    comparator: str
    literal: Any

    def test(self, item: Any) -> bool:
        compare = COMPARATORS.get(self.comparator)
        if compare is None:
            return False
        return compare(read_field(item, self.field), self.literal)


FilterCondition = StringPredicate | Comparison


def parse_literal(raw: str) -> Any:
    """Quoted text becomes a string, anything else a number (NaN if invalid)."""
    text = raw.strip()
    if len(text) >= 2 and text[0] in "'\"" and text[-1] == text[0]:
        return text[1:-1]
    return to_number(text)


def parse_condition(condition: str) -> FilterCondition | None:
    """Parse a condition, trying string predicates before comparisons.

    Returns:
        The parsed condition, or None when neither grammar matches.
    """
    for name, pattern in _PREDICATE_PATTERNS.items():
        if f".{name}" not in condition:
            continue
        match = pattern.search(condition)
        if match:
            return StringPredicate(match.group(1), name, match.group(2))

    match = _COMPARISON_PATTERN.search(condition)
    if match:
        field, comparator, raw_value = match.groups()
        return Comparison(field, comparator, parse_literal(raw_value))

    return None


def filter_items(data: list[Any], condition: str) -> list[Any]:
    """Keep the elements that satisfy ``condition``, in their original order.

    An unparseable condition matches nothing. An element whose test raises
    is excluded rather than aborting the whole pass.
    """
    parsed = parse_condition(condition)
    if parsed is None:
        logger.debug("Condition %r matches no filter grammar", condition)
        return []

    kept: list[Any] = []
    for item in data:
        try:
            if parsed.test(item):
                kept.append(item)
        except Exception:
            logger.debug(
                "Excluding element that failed condition %r", condition, exc_info=True
            )
            continue
    return kept
