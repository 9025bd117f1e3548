"""Tern AST node definitions.

Every node is a Python dataclass carrying ``line`` and ``col`` for
source-location tracking.  A single ``Node`` base class provides
these fields so concrete nodes only declare domain-specific data.

Child slots that the parser could not fill hold ``None``.  The value of a
``let`` or ``return`` statement is always ``None`` for now: the parser skips
to the terminating semicolon instead of parsing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass
class Node:
    """Base class for every AST node."""
    line: int = 0
    col: int = 0


def _text(node: Node | None) -> str:
    return "" if node is None else str(node)


# ── Program ─────────────────────────────────────────────────────────────────

@dataclass
class Program(Node):
    statements: list = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(stmt) for stmt in self.statements)


# ── Expressions ─────────────────────────────────────────────────────────────

@dataclass
class Identifier(Node):
    value: str = ""

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Node):
    value: int = 0
    literal: str = ""

    def __str__(self) -> str:
        return self.literal or str(self.value)


@dataclass
class PrefixExpression(Node):
    operator: str = ""
    right: Any = None

    def __str__(self) -> str:
        return f"({self.operator}{_text(self.right)})"


@dataclass
class InfixExpression(Node):
    left: Any = None
    operator: str = ""
    right: Any = None

    def __str__(self) -> str:
        return f"({_text(self.left)} {self.operator} {_text(self.right)})"


# ── Statements ──────────────────────────────────────────────────────────────

@dataclass
class LetStatement(Node):
    name: Identifier | None = None
    value: Any = None

    def __str__(self) -> str:
        return f"let {_text(self.name)} = {_text(self.value)};"


@dataclass
class ReturnStatement(Node):
    value: Any = None

    def __str__(self) -> str:
        return f"return {_text(self.value)};"


@dataclass
class ExpressionStatement(Node):
    expression: Any = None

    def __str__(self) -> str:
        return _text(self.expression)


# ── Serialisation ───────────────────────────────────────────────────────────

def to_dict(node: Node | None) -> dict | None:
    """Convert a tree into plain dicts, tagging each with its node class."""
    if node is None:
        return None
    out: dict[str, Any] = {"node": type(node).__name__}
    for f in fields(node):
        val = getattr(node, f.name)
        if isinstance(val, Node):
            out[f.name] = to_dict(val)
        elif isinstance(val, list):
            out[f.name] = [to_dict(item) for item in val]
        else:
            out[f.name] = val
    return out
