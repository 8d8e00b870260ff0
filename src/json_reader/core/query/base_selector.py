"""Standard JSONPath evaluation backed by jsonpath-ng."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonpath_ng.ext import parse as jsonpath_parse
from jsonpath_ng.jsonpath import Child, Fields, Index, Root, This

from json_reader.core.errors import BaseSelectorError


@lru_cache(maxsize=256)
def _compile(json_path: str) -> Any:
    """Parse a JSONPath string, caching the compiled expression.

    Exceptions are not cached by lru_cache, so a failing path is re-parsed
    (and fails again) on every call.
    """
    return jsonpath_parse(json_path)


def _compile_or_raise(json_path: str) -> Any:
    try:
        return _compile(json_path)
    except Exception as e:
        # Lexer and parser failures from jsonpath-ng alike
        raise BaseSelectorError(json_path, str(e)) from e


def _is_singular_node(node: Any) -> bool:
    if isinstance(node, (Root, This)):
        return True
    if isinstance(node, Child):
        return _is_singular_node(node.left) and _is_singular_node(node.right)
    if isinstance(node, Fields):
        return len(node.fields) == 1 and node.fields[0] != "*"
    if isinstance(node, Index):
        # jsonpath-ng 1.7 allows unions such as [0,2] in one Index
        indices = getattr(node, "indices", None)
        return indices is None or len(indices) == 1
    # Descendants, slices, filters, unions and extension nodes
    return False


def is_singular(json_path: str) -> bool:
    """True when ``json_path`` names at most one location.

    Raises:
        BaseSelectorError: If the path does not parse.
    """
    return _is_singular_node(_compile_or_raise(json_path))


def query(document: Any, json_path: str) -> list[Any]:
    """Return every value matched by ``json_path``.

    Raises:
        BaseSelectorError: If the path does not parse or evaluate.
    """
    expression = _compile_or_raise(json_path)
    try:
        return [match.value for match in expression.find(document)]
    except Exception as e:
        raise BaseSelectorError(json_path, str(e)) from e


def select_first(document: Any, json_path: str) -> Any:
    """Value of the first match, or None when nothing matches."""
    matches = query(document, json_path)
    return matches[0] if matches else None


def select_sequence(document: Any, json_path: str) -> list[Any]:
    """Elements for the sequence engines.

    A singular path yields the contents of the array it names (a non-array
    value is wrapped, nothing is empty). Any other path yields the list of
    matches, however many there are.
    """
    matches = query(document, json_path)
    if is_singular(json_path):
        return as_sequence(matches[0] if matches else None)
    return matches


def as_sequence(value: Any) -> list[Any]:
    """Wrap a selector result as a list for sequence-consuming engines."""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]
