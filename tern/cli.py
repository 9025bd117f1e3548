"""Tern CLI — tern check, tern ast, tern tokens."""
import json
import logging
import os
import sys

from tern.ast_nodes import to_dict
from tern.config import configure_logging, get_config
from tern.errors import TernError
from tern.lexer import Lexer, TokenType
from tern.parser import Parser

logger = logging.getLogger(__name__)

COMMANDS = ("check", "ast", "tokens")


def _report(filepath, diagnostics):
    for d in diagnostics:
        print(f"{filepath}:{d.line}:{d.column}: {d.message}", file=sys.stderr)


def main():
    if len(sys.argv) < 2:
        print("Usage: tern <command> [file.tern]", file=sys.stderr)
        print("Commands: check, ast, tokens", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command not in COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)

    if len(sys.argv) < 3:
        print(f"Usage: tern {command} <file.tern>", file=sys.stderr)
        sys.exit(1)
    filepath = sys.argv[2]
    if not os.path.exists(filepath):
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)

    try:
        config = get_config()
    except TernError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)
    configure_logging(config)

    try:
        with open(filepath, encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {filepath}: {e}", file=sys.stderr)
        sys.exit(1)
    logger.debug("read %d characters from %s", len(source), filepath)

    if command == "tokens":
        for tok in Lexer(source).tokenize():
            if tok.type == TokenType.EOF:
                break
            print(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.literal}")
        sys.exit(0)

    parser = Parser(Lexer(source))
    try:
        program = parser.parse_program()
    except RecursionError:
        print(f"Error: {filepath}: expression nested too deeply", file=sys.stderr)
        sys.exit(1)
    diagnostics = parser.diagnostics()

    if command == "check":
        if diagnostics:
            _report(filepath, diagnostics)
            sys.exit(1)
        print(f"OK: {filepath}")
        sys.exit(0)

    if config["output"]["format"] == "json":
        print(json.dumps(to_dict(program), indent=2))
    else:
        for stmt in program.statements:
            print(stmt)

    _report(filepath, diagnostics)
    sys.exit(1 if diagnostics else 0)


if __name__ == "__main__":
    main()
