"""Tern lexer — scans source text into tokens, one at a time."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Protocol


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    ILLEGAL = auto()
    EOF = auto()

    # Identifiers and literals
    IDENT = auto()
    INT = auto()

    # Operators
    ASSIGN = auto()        # =
    PLUS = auto()          # +
    MINUS = auto()         # -
    BANG = auto()          # !
    ASTERISK = auto()      # *
    SLASH = auto()         # /
    LT = auto()            # <
    GT = auto()            # >
    EQ = auto()            # ==
    NOT_EQ = auto()        # !=

    # Delimiters
    COMMA = auto()         # ,
    SEMICOLON = auto()     # ;
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACE = auto()        # {
    RBRACE = auto()        # }

    # Keywords
    FUNCTION = auto()
    LET = auto()
    TRUE = auto()
    FALSE = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()


# ---------------------------------------------------------------------------
# Keyword and operator lookup
# ---------------------------------------------------------------------------

KEYWORDS: dict[str, TokenType] = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}

TWO_CHAR_OPERATORS: dict[str, TokenType] = {
    "==": TokenType.EQ,
    "!=": TokenType.NOT_EQ,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "!": TokenType.BANG,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


# ---------------------------------------------------------------------------
# Token dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r}, L{self.line}:{self.column})"


class TokenSource(Protocol):
    """Anything the parser can pull tokens from."""

    def next_token(self) -> Token:
        ...


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Scans Tern source text and hands out tokens on demand.

    The lexer never raises: characters it does not recognise come back as
    ``ILLEGAL`` tokens, and once the source is exhausted every further call
    to :meth:`next_token` returns an ``EOF`` token.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at EOF."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def peek(self) -> str:
        """Look ahead one character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.source):
            return self.source[next_pos]
        return ""

    def advance(self) -> str:
        """Consume and return the current character, advancing position."""
        ch = self._current()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self._current() in (" ", "\t", "\r", "\n"):
            self.advance()

    # -- Main entry points -------------------------------------------------

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()

        line, col = self.line, self.col
        ch = self._current()

        if ch == "":
            return Token(TokenType.EOF, "", line, col)

        # Identifiers and keywords
        if ch.isalpha() or ch == "_":
            return self._read_identifier()

        # Numbers
        if ch.isdigit():
            return self._read_number()

        # Two-character operators (must check before single-char)
        pair = ch + self.peek()
        if pair in TWO_CHAR_OPERATORS:
            self.advance()
            self.advance()
            return Token(TWO_CHAR_OPERATORS[pair], pair, line, col)

        self.advance()
        token_type = SINGLE_CHAR_TOKENS.get(ch, TokenType.ILLEGAL)
        return Token(token_type, ch, line, col)

    def tokenize(self) -> list[Token]:
        """Scan the entire source and return a list of tokens ending with EOF."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                return tokens

    # -- Token readers -----------------------------------------------------

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword: [a-zA-Z_][a-zA-Z0-9_]*"""
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        while self._current() != "" and (self._current().isalnum() or self._current() == "_"):
            chars.append(self.advance())

        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENT)
        return Token(token_type, word, start_line, start_col)

    def _read_number(self) -> Token:
        """Read an integer literal: [0-9][0-9a-zA-Z_]*

        Base prefixes (``0x``, ``0o``, ``0b``) and trailing junk are kept in
        the literal; the parser decides whether it converts.
        """
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        while self._current() != "" and (self._current().isalnum() or self._current() == "_"):
            chars.append(self.advance())

        return Token(TokenType.INT, "".join(chars), start_line, start_col)


class TokenStream:
    """Replays a pre-built sequence of tokens through ``next_token()``.

    Once the sequence runs out, an ``EOF`` token positioned after the last
    token is returned on every call.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._last: Token | None = None

    def next_token(self) -> Token:
        for tok in self._tokens:
            self._last = tok
            return tok
        if self._last is not None:
            return Token(TokenType.EOF, "", self._last.line, self._last.column)
        return Token(TokenType.EOF, "", 1, 1)
