"""Operator binding strengths used by the expression parser."""

from __future__ import annotations

from enum import IntEnum

from tern.lexer import TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2        # ==
    LESSGREATER = 3   # > or <
    SUM = 4           # +
    PRODUCT = 5       # *
    PREFIX = 6        # -X or !X
    CALL = 7          # myfunction(X)


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
}


def precedence_of(token_type: TokenType) -> Precedence:
    """Return the binding strength of *token_type*, LOWEST if it has none."""
    return PRECEDENCES.get(token_type, Precedence.LOWEST)
