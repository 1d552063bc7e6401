"""AST node definitions for the Lox language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from loxparse.tokens import LiteralValue, Token

# ── Expressions ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Literal:
    value: LiteralValue


@dataclass(frozen=True)
class Grouping:
    expression: Expr


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: Expr


@dataclass(frozen=True)
class Call:
    callee: Expr
    paren: Token  # closing paren, kept for runtime error reporting
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Mark:
    """Produced when no primary alternative matches.

    The parser consumes nothing when it returns a Mark, and callers do not
    inspect for it, so it can end up anywhere an expression is expected.
    """


Expr = Union[
    Literal, Grouping, Unary, Binary, Variable, Assign, Call, Mark,
]


# ── Statements ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ExpressionStmt:
    expression: Expr


@dataclass(frozen=True)
class PrintStmt:
    expression: Expr


@dataclass(frozen=True)
class VarStmt:
    name: Token
    initializer: Expr


@dataclass(frozen=True)
class BlockStmt:
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class IfStmt:
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None  # None when there is no else clause


@dataclass(frozen=True)
class FunctionStmt:
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


Stmt = Union[
    ExpressionStmt, PrintStmt, VarStmt, BlockStmt, IfStmt, FunctionStmt,
]
