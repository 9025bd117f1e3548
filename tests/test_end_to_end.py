"""End-to-end tests for the Tern front end: source -> tokens -> AST."""

import os

import pytest

from tern import ParseError, parse_source
from tern.lexer import Lexer
from tern.parser import Parser
from tern.ast_nodes import LetStatement, ReturnStatement, ExpressionStatement

EXAMPLES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "examples")


def read_example(name: str) -> str:
    with open(os.path.join(EXAMPLES_DIR, name)) as f:
        return f.read()


def test_arithmetic_example():
    program = parse_source(read_example("arithmetic.tern"))
    kinds = [type(s) for s in program.statements]
    assert kinds == [LetStatement, LetStatement, ReturnStatement, ExpressionStatement, ExpressionStatement]
    assert [str(s) for s in program.statements[3:]] == [
        "(((-width) * height) + 2)",
        "(((width - height) - 1) != (5 < 3))",
    ]


def test_broken_example_collects_every_diagnostic():
    parser = Parser(Lexer(read_example("broken.tern")))
    parser.parse_program()
    assert parser.errors() == [
        "expected next token to be ASSIGN, got INT instead",
        "expected next token to be IDENT, got ASSIGN instead",
        "no prefix parse function for ASSIGN found",
    ]


def test_parse_source_raises_on_diagnostics():
    with pytest.raises(ParseError) as exc_info:
        parse_source(read_example("broken.tern"))
    err = exc_info.value
    assert len(err.diagnostics) == 3
    assert (err.line, err.column) == (1, 7)
    assert "and 2 more" in str(err)
    assert str(err).startswith("Line 1, Col 7: expected next token to be ASSIGN")
