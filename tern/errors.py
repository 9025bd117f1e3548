"""Tern error types with source location info."""

from __future__ import annotations


class TernError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, Col {column}: {message}")


class ParseError(TernError):
    """Raised by callers that refuse a tree with diagnostics attached.

    The parser itself never raises; it only records diagnostics.
    """

    def __init__(self, diagnostics: list):
        self.diagnostics = list(diagnostics)
        first = self.diagnostics[0]
        message = first.message
        if len(self.diagnostics) > 1:
            message += f" (and {len(self.diagnostics) - 1} more)"
        super().__init__(message, first.line, first.column)


class ConfigError(TernError):
    pass
