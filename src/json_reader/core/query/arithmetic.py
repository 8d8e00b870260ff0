"""
Arithmetic evaluator for the math() operator.

Accepts decimal literals, ``+ - * /``, unary signs and parentheses, and
nothing else. Evaluation uses Decimal so that ``10 * 1.1`` is exactly 11.

Grammar::

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/") factor)*
    factor     := ("+" | "-") factor | NUMBER | "(" expression ")"
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from json_reader.core.errors import ArithmeticExpressionError

ALLOWED_CHARACTERS = frozenset("0123456789+-*/ \t\n\r.()")


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    NUMBER = "NUMBER"
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int


_SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


def is_safe_expression(source: str) -> bool:
    """True when ``source`` uses only arithmetic characters."""
    return bool(source.strip()) and all(ch in ALLOWED_CHARACTERS for ch in source)


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens, rejecting any other character."""
    tokens: list[Token] = []
    position = 0
    while position < len(source):
        ch = source[position]
        if ch in " \t\n\r":
            position += 1
            continue
        if ch in _SINGLE_CHAR_TOKENS:
            tokens.append(Token(_SINGLE_CHAR_TOKENS[ch], ch, position))
            position += 1
            continue
        if ch.isdigit() or ch == ".":
            start = position
            while position < len(source) and (
                source[position].isdigit() or source[position] == "."
            ):
                position += 1
            text = source[start:position]
            if text.count(".") > 1 or text == ".":
                raise ArithmeticExpressionError(f"Invalid number '{text}'", start)
            tokens.append(Token(TokenType.NUMBER, text, start))
            continue
        raise ArithmeticExpressionError(f"Unexpected character '{ch}'", position)

    tokens.append(Token(TokenType.EOF, "", position))
    return tokens


class Parser:
    """Recursive-descent evaluator over a token list."""

    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._current = 0

    def parse(self) -> Decimal:
        value = self._expression()
        if self._peek().type != TokenType.EOF:
            token = self._peek()
            raise ArithmeticExpressionError(
                f"Unexpected token '{token.value}'", token.position
            )
        return value

    def _expression(self) -> Decimal:
        value = self._term()
        while self._match(TokenType.PLUS, TokenType.MINUS):
            operator = self._previous()
            right = self._term()
            if operator.type == TokenType.PLUS:
                value = value + right
            else:
                value = value - right
        return value

    def _term(self) -> Decimal:
        value = self._factor()
        while self._match(TokenType.STAR, TokenType.SLASH):
            operator = self._previous()
            right = self._factor()
            if operator.type == TokenType.STAR:
                value = value * right
            else:
                if right == 0:
                    raise ArithmeticExpressionError(
                        "Division by zero", operator.position
                    )
                value = value / right
        return value

    def _factor(self) -> Decimal:
        if self._match(TokenType.MINUS):
            return -self._factor()
        if self._match(TokenType.PLUS):
            return self._factor()
        if self._match(TokenType.NUMBER):
            return Decimal(self._previous().value)
        if self._match(TokenType.LPAREN):
            value = self._expression()
            if not self._match(TokenType.RPAREN):
                raise ArithmeticExpressionError(
                    "Expected ')'", self._peek().position
                )
            return value
        token = self._peek()
        raise ArithmeticExpressionError(
            f"Unexpected token '{token.value or 'end of input'}'", token.position
        )

    def _match(self, *types: TokenType) -> bool:
        if self._peek().type in types:
            self._current += 1
            return True
        return False

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[self._current - 1]


def apply_to_value(value: int | float, source: str) -> float:
    """Evaluate ``<value> <source>``, e.g. ``apply_to_value(10, "* 1.1")``.

    Raises:
        ArithmeticExpressionError: If ``source`` contains anything other than
            arithmetic, does not parse, or divides by zero.
    """
    if not is_safe_expression(source):
        raise ArithmeticExpressionError(
            f"Unsupported arithmetic expression '{source}'"
        )

    try:
        left = Decimal(repr(value))
    except InvalidOperation as e:
        raise ArithmeticExpressionError(f"Invalid operand {value!r}") from e
    if not left.is_finite():
        raise ArithmeticExpressionError(f"Invalid operand {value!r}")

    tokens = [Token(TokenType.NUMBER, str(left), 0), *tokenize(source)]
    return float(Parser(tokens).parse())
