"""Two-token lookahead over a token source."""

from __future__ import annotations

from tern.lexer import Token, TokenSource, TokenType


class Cursor:
    """Holds the token being parsed and the one after it.

    Both slots are filled at construction.  A cursor belongs to a single
    parser and pulls from its source only through :meth:`advance`.
    """

    def __init__(self, source: TokenSource) -> None:
        self._source = source
        self.current: Token = Token(TokenType.EOF, "")
        self.peek: Token = Token(TokenType.EOF, "")
        self.advance()
        self.advance()

    def advance(self) -> None:
        """Shift the lookahead into the current slot and pull a new lookahead."""
        self.current = self.peek
        self.peek = self._source.next_token()

    def current_is(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def peek_is(self, token_type: TokenType) -> bool:
        return self.peek.type == token_type
