"""Tern parser — Pratt expression parser framed by statement-level descent.

Statements are dispatched on their leading token.  Expressions go through
a registry of prefix and infix handlers keyed by token type, with operator
grouping decided by the binding strengths in :mod:`tern.precedence`.

The parser never raises on malformed input.  Each problem is recorded as a
diagnostic, the construct being built comes back as ``None`` and parsing
carries on with the next token.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional, Union

from tern.ast_nodes import (
    Program,
    Identifier,
    IntegerLiteral,
    PrefixExpression,
    InfixExpression,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
)
from tern.cursor import Cursor
from tern.lexer import Token, TokenSource, TokenStream, TokenType
from tern.precedence import Precedence, precedence_of

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Optional[object]]
InfixParseFn = Callable[[object], Optional[object]]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_LEGACY_OCTAL = re.compile(r"0[0-7_]+")


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line: int = 0
    column: int = 0


def parse_int64(text: str) -> int:
    """Convert an integer literal to a signed 64-bit value.

    Accepts decimal, ``0x``/``0o``/``0b`` prefixed forms and a leading ``0``
    for octal, with ``_`` between digits.  Raises ValueError otherwise or when
    the value does not fit in 64 bits.
    """
    if not text.isascii() or text != text.strip():
        raise ValueError(f"invalid integer literal: {text!r}")
    sign, body = "", text
    if body.startswith(("+", "-")):
        sign, body = body[0], body[1:]
    if _LEGACY_OCTAL.fullmatch(body):
        body = "0o" + body[1:]
    value = int(sign + body, 0)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer literal out of range: {text!r}")
    return value


class Parser:
    """Pratt parser for the Tern language.

    Pulls tokens from a ``TokenSource`` (a :class:`~tern.lexer.Lexer`, or a
    plain sequence of tokens) and produces an AST rooted at a ``Program``
    node.  Problems found along the way are available from :meth:`errors`.
    """

    def __init__(self, source: Union[TokenSource, Iterable[Token]]) -> None:
        if not hasattr(source, "next_token"):
            source = TokenStream(source)
        self.cursor = Cursor(source)
        self._diagnostics: list[Diagnostic] = []
        self._sealed = False

        self._prefix_fns: dict[TokenType, PrefixParseFn] = {}
        self._infix_fns: dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)

        for token_type in (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.SLASH,
            TokenType.ASTERISK,
            TokenType.EQ,
            TokenType.NOT_EQ,
            TokenType.LT,
            TokenType.GT,
        ):
            self.register_infix(token_type, self.parse_infix_expression)

        # Registration is closed once construction finishes.
        self.prefix_parse_fns: Mapping[TokenType, PrefixParseFn] = MappingProxyType(self._prefix_fns)
        self.infix_parse_fns: Mapping[TokenType, InfixParseFn] = MappingProxyType(self._infix_fns)
        self._sealed = True

    # -- Registry ----------------------------------------------------------

    def register_prefix(self, token_type: TokenType, fn: PrefixParseFn) -> None:
        if self._sealed:
            raise RuntimeError("prefix handlers can only be registered during construction")
        self._prefix_fns[token_type] = fn

    def register_infix(self, token_type: TokenType, fn: InfixParseFn) -> None:
        if self._sealed:
            raise RuntimeError("infix handlers can only be registered during construction")
        self._infix_fns[token_type] = fn

    # -- Navigation helpers ------------------------------------------------

    @property
    def current(self) -> Token:
        return self.cursor.current

    @property
    def peek(self) -> Token:
        return self.cursor.peek

    def advance(self) -> None:
        self.cursor.advance()

    def expect_peek(self, token_type: TokenType) -> bool:
        """Advance if the lookahead is *token_type*; otherwise record a diagnostic.

        On mismatch the cursor does not move.
        """
        if self.cursor.peek_is(token_type):
            self.advance()
            return True
        self._peek_error(token_type)
        return False

    def peek_precedence(self) -> Precedence:
        return precedence_of(self.peek.type)

    def current_precedence(self) -> Precedence:
        return precedence_of(self.current.type)

    # -- Diagnostics -------------------------------------------------------

    def errors(self) -> list[str]:
        """Return the diagnostic messages recorded so far, oldest first."""
        return [d.message for d in self._diagnostics]

    def diagnostics(self) -> list[Diagnostic]:
        """Like :meth:`errors`, with the position each problem was found at."""
        return list(self._diagnostics)

    def _record(self, message: str, tok: Token) -> None:
        logger.debug("L%d:%d %s", tok.line, tok.column, message)
        self._diagnostics.append(Diagnostic(message, tok.line, tok.column))

    def _peek_error(self, token_type: TokenType) -> None:
        self._record(
            f"expected next token to be {token_type.name}, got {self.peek.type.name} instead",
            self.peek,
        )

    def _no_prefix_parse_fn_error(self, tok: Token) -> None:
        self._record(f"no prefix parse function for {tok.type.name} found", tok)

    # -- Top-level ---------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse statements until end of input and return the ``Program``."""
        start = self.current
        statements: list = []

        while not self.cursor.current_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.advance()

        logger.debug(
            "parsed %d statement(s) with %d diagnostic(s)",
            len(statements),
            len(self._diagnostics),
        )
        return Program(statements=statements, line=start.line, col=start.column)

    # -- Statement parsing -------------------------------------------------

    def parse_statement(self):
        if self.cursor.current_is(TokenType.LET):
            return self.parse_let_statement()
        if self.cursor.current_is(TokenType.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """Parse ``let <ident> = ...;``.

        The bound expression is skipped up to the semicolon and the value is
        left as ``None``.
        """
        let_tok = self.current

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(value=self.current.literal, line=self.current.line, col=self.current.column)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        # TODO: parse the bound expression instead of skipping it.
        self._skip_to_semicolon()
        return LetStatement(name=name, value=None, line=let_tok.line, col=let_tok.column)

    def parse_return_statement(self) -> ReturnStatement:
        """Parse ``return ...;``, skipping the returned expression."""
        return_tok = self.current
        self.advance()
        self._skip_to_semicolon()
        return ReturnStatement(value=None, line=return_tok.line, col=return_tok.column)

    def _skip_to_semicolon(self) -> None:
        while not (self.cursor.current_is(TokenType.SEMICOLON) or self.cursor.current_is(TokenType.EOF)):
            self.advance()

    def parse_expression_statement(self) -> ExpressionStatement:
        first = self.current
        expression = self.parse_expression(Precedence.LOWEST)

        # Semicolon is optional
        if self.cursor.peek_is(TokenType.SEMICOLON):
            self.advance()
        return ExpressionStatement(expression=expression, line=first.line, col=first.column)

    # -- Expression parsing ------------------------------------------------

    def parse_expression(self, precedence: Precedence):
        """Parse an expression whose operators bind tighter than *precedence*."""
        prefix = self.prefix_parse_fns.get(self.current.type)
        if prefix is None:
            self._no_prefix_parse_fn_error(self.current)
            return None
        left = prefix()

        while not self.cursor.peek_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek.type)
            if infix is None:
                return left
            self.advance()
            left = infix(left)

        return left

    def parse_identifier(self) -> Identifier:
        tok = self.current
        return Identifier(value=tok.literal, line=tok.line, col=tok.column)

    def parse_integer_literal(self) -> IntegerLiteral | None:
        tok = self.current
        try:
            value = parse_int64(tok.literal)
        except ValueError:
            self._record(f'could not parse "{tok.literal}" as integer', tok)
            return None
        return IntegerLiteral(value=value, literal=tok.literal, line=tok.line, col=tok.column)

    def parse_prefix_expression(self) -> PrefixExpression:
        tok = self.current
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator=tok.literal, right=right, line=tok.line, col=tok.column)

    def parse_infix_expression(self, left) -> InfixExpression:
        tok = self.current
        precedence = self.current_precedence()
        self.advance()
        # Same-precedence operators fail the strict test in the nested call,
        # so chains group to the left.
        right = self.parse_expression(precedence)
        return InfixExpression(left=left, operator=tok.literal, right=right, line=tok.line, col=tok.column)
