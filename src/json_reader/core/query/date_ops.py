"""Date operators: format() and isToday()."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

# Replaced in this order, first occurrence only.
FORMAT_TOKENS: tuple[tuple[str, str], ...] = (
    ("YYYY", "%Y"),
    ("MM", "%m"),
    ("DD", "%d"),
    ("HH", "%H"),
    ("mm", "%M"),
    ("ss", "%S"),
)


def _to_local(moment: datetime) -> datetime:
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def parse_datetime(value: Any) -> datetime | None:
    """Interpret a JSON value as a local date/time.

    Numbers are epoch milliseconds. Strings are tried as ISO-8601 first (a
    trailing ``Z`` is accepted), then as any form dateutil understands,
    such as ``2024/01/15`` or RFC 2822. Missing date parts default to the
    first of January of the current year. Naive values are taken as local
    time; aware values are converted to local time. Anything else returns
    None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return _to_local(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    default = datetime(date.today().year, 1, 1)
    try:
        return _to_local(date_parser.parse(text, default=default))
    except (ValueError, OverflowError):
        return None


def format_datetime(moment: datetime, pattern: str) -> str:
    result = pattern
    for token, directive in FORMAT_TOKENS:
        if directive == "%Y":
            replacement = str(moment.year)
        else:
            replacement = moment.strftime(directive)
        result = result.replace(token, replacement, 1)
    return result


def is_today(value: Any, today: date | None = None) -> bool:
    moment = parse_datetime(value)
    if moment is None:
        return False
    return moment.date() == (today or date.today())


def apply_date_operation(
    data: list[Any], operation: str, argument: str | None = None
) -> list[Any]:
    """Apply ``format`` or ``isToday`` to every element.

    Values that do not parse as dates pass through ``format`` unchanged and
    are never today. ``format`` without a pattern, and unknown operations,
    return the data unchanged.
    """
    if operation == "format" and argument is not None:
        results: list[Any] = []
        for item in data:
            moment = parse_datetime(item)
            if moment is None:
                results.append(item)
            else:
                results.append(format_datetime(moment, argument))
        return results

    if operation == "isToday":
        today = date.today()
        return [is_today(item, today) for item in data]

    return list(data)
