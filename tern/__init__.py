"""Tern — syntactic analysis for the Tern language."""

from tern.ast_nodes import Program
from tern.errors import TernError, ParseError, ConfigError
from tern.lexer import Lexer, Token, TokenStream, TokenType
from tern.parser import Diagnostic, Parser


def parse_source(source: str) -> Program:
    """Lex and parse *source*, raising ParseError if anything was reported.

    Use this where a tree with missing parts must not go any further; use
    ``Parser`` directly to collect every diagnostic instead.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.diagnostics():
        raise ParseError(parser.diagnostics())
    return program


__all__ = [
    "Lexer", "Token", "TokenStream", "TokenType",
    "Parser", "Diagnostic", "Program", "parse_source",
    "TernError", "ParseError", "ConfigError",
]
