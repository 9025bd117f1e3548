"""Tests for Tern lexer — tokenization and the pull interface."""

import pytest

from tern.lexer import Lexer, Token, TokenStream, TokenType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def lex(source: str) -> list[Token]:
    """Convenience: tokenize source and return the token list."""
    return Lexer(source).tokenize()


def types(source: str) -> list[TokenType]:
    """Return just the token types (excluding EOF) for quick assertions."""
    return [t.type for t in lex(source) if t.type != TokenType.EOF]


def literals(source: str) -> list[str]:
    """Return just the token literals (excluding EOF)."""
    return [t.literal for t in lex(source) if t.type != TokenType.EOF]


# ---------------------------------------------------------------------------
# Empty / Minimal Input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    def test_empty_string(self):
        tokens = lex("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        tokens = lex("  \t\r\n  ")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_eof_repeats(self):
        lexer = Lexer("x")
        assert lexer.next_token().type == TokenType.IDENT
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

class TestOperators:
    def test_single_char(self):
        assert types("=+-!*/<>,;(){}") == [
            TokenType.ASSIGN, TokenType.PLUS, TokenType.MINUS, TokenType.BANG,
            TokenType.ASTERISK, TokenType.SLASH, TokenType.LT, TokenType.GT,
            TokenType.COMMA, TokenType.SEMICOLON, TokenType.LPAREN, TokenType.RPAREN,
            TokenType.LBRACE, TokenType.RBRACE,
        ]

    def test_two_char(self):
        assert types("== != = !") == [TokenType.EQ, TokenType.NOT_EQ, TokenType.ASSIGN, TokenType.BANG]
        assert literals("10 == 10; 10 != 9;") == ["10", "==", "10", ";", "10", "!=", "9", ";"]

    def test_illegal(self):
        tokens = lex("@")
        assert tokens[0].type == TokenType.ILLEGAL
        assert tokens[0].literal == "@"


class TestWords:
    @pytest.mark.parametrize("word, token_type", [
        ("fn", TokenType.FUNCTION),
        ("let", TokenType.LET),
        ("true", TokenType.TRUE),
        ("false", TokenType.FALSE),
        ("if", TokenType.IF),
        ("else", TokenType.ELSE),
        ("return", TokenType.RETURN),
    ])
    def test_keywords(self, word, token_type):
        assert types(word) == [token_type]

    def test_identifiers(self):
        assert types("five _ten let_x returned") == [TokenType.IDENT] * 4
        assert literals("five _ten") == ["five", "_ten"]


class TestNumbers:
    def test_integer(self):
        tokens = lex("42")
        assert tokens[0].type == TokenType.INT
        assert tokens[0].literal == "42"

    def test_prefixed_and_junk_stay_one_token(self):
        assert literals("0x1F 1_000 12abc") == ["0x1F", "1_000", "12abc"]
        assert types("0x1F 1_000 12abc") == [TokenType.INT] * 3


class TestStatements:
    def test_let_statement(self):
        assert types("let five = 5;") == [
            TokenType.LET, TokenType.IDENT, TokenType.ASSIGN, TokenType.INT, TokenType.SEMICOLON,
        ]

    def test_positions(self):
        tokens = lex("let x = 5;\n  return x;")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[3].line, tokens[3].column) == (1, 9)
        ret = tokens[5]
        assert ret.type == TokenType.RETURN
        assert (ret.line, ret.column) == (2, 3)

    def test_tokens_are_immutable(self):
        tok = lex("x")[0]
        with pytest.raises(AttributeError):
            tok.literal = "y"


# ---------------------------------------------------------------------------
# TokenStream
# ---------------------------------------------------------------------------

class TestTokenStream:
    def test_replays_then_eof(self):
        stream = TokenStream([Token(TokenType.IDENT, "a", 3, 4)])
        assert stream.next_token().literal == "a"
        eof = stream.next_token()
        assert eof.type == TokenType.EOF
        assert (eof.line, eof.column) == (3, 4)
        assert stream.next_token().type == TokenType.EOF

    def test_empty(self):
        assert TokenStream([]).next_token().type == TokenType.EOF

    def test_accepts_generator(self):
        stream = TokenStream(t for t in lex("a b"))
        assert [stream.next_token().literal for _ in range(2)] == ["a", "b"]
