"""AST-walking pretty-printer for Lox source code.

Produces canonical formatting for .lox files. Parentheses come only from
Grouping nodes, so formatting a parsed tree never changes its shape.

Limitations: ``//`` comments are discarded by the lexer and are not
preserved. The grammar has no statement terminators, so an expression
statement followed by one starting with ``(`` re-parses as a call.
"""

from __future__ import annotations

from collections.abc import Sequence

from loxparse.ast_nodes import (
    Assign,
    Binary,
    BlockStmt,
    Call,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Literal,
    PrintStmt,
    Stmt,
    Unary,
    Variable,
    VarStmt,
)
from loxparse.printer import format_literal


class LoxFormatter:
    """Format parsed Lox statements back to canonical source text."""

    def __init__(self, indent_width: int = 4) -> None:
        self.indent_width = indent_width

    # ── Public API ─────────────────────────────────────────────

    def format(self, statements: Sequence[Stmt]) -> str:
        """Format top-level statements, one per line."""
        result = "\n".join(self._format_stmt(stmt) for stmt in statements)
        if not result.endswith("\n"):
            result += "\n"
        return result

    # ── Statements ─────────────────────────────────────────────

    def _format_stmt(self, stmt: Stmt) -> str:
        if isinstance(stmt, ExpressionStmt):
            return self._format_expr(stmt.expression)
        if isinstance(stmt, PrintStmt):
            return f"print {self._format_expr(stmt.expression)}"
        if isinstance(stmt, VarStmt):
            return f"var {stmt.name.lexeme} = {self._format_expr(stmt.initializer)}"
        if isinstance(stmt, BlockStmt):
            return self._format_block(stmt.statements)
        if isinstance(stmt, IfStmt):
            text = f"if ({self._format_expr(stmt.condition)}) {self._format_stmt(stmt.then_branch)}"
            if stmt.else_branch is not None:
                text += f" else {self._format_stmt(stmt.else_branch)}"
            return text
        if isinstance(stmt, FunctionStmt):
            params = ", ".join(p.lexeme for p in stmt.params)
            return f"function {stmt.name.lexeme}({params}) {self._format_block(stmt.body)}"
        return ""

    def _format_block(self, statements: Sequence[Stmt]) -> str:
        if not statements:
            return "{}"
        lines = ["{"]
        for stmt in statements:
            lines.append(self._indent(self._format_stmt(stmt)))
        lines.append("}")
        return "\n".join(lines)

    # ── Expressions ────────────────────────────────────────────

    def _format_expr(self, expr: object) -> str:
        if isinstance(expr, Literal):
            return format_literal(expr.value)
        if isinstance(expr, Grouping):
            return f"({self._format_expr(expr.expression)})"
        if isinstance(expr, Unary):
            return f"{expr.operator.lexeme}{self._format_expr(expr.right)}"
        if isinstance(expr, Binary):
            return (
                f"{self._format_expr(expr.left)} {expr.operator.lexeme} "
                f"{self._format_expr(expr.right)}"
            )
        if isinstance(expr, Variable):
            return expr.name.lexeme
        if isinstance(expr, Assign):
            return f"{expr.name.lexeme} = {self._format_expr(expr.value)}"
        if isinstance(expr, Call):
            args = ", ".join(self._format_expr(a) for a in expr.arguments)
            return f"{self._format_expr(expr.callee)}({args})"
        # Mark has no source form
        return ""

    # ── Helpers ────────────────────────────────────────────────

    def _indent(self, text: str) -> str:
        prefix = " " * self.indent_width
        return "\n".join(prefix + line if line else line for line in text.splitlines())
