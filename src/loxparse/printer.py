"""Debug renderings of a parsed AST: S-expressions and an indented tree."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from decimal import Decimal

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
    Mark,
    PrintStmt,
    Unary,
    Variable,
    VarStmt,
)
from loxparse.tokens import LiteralValue, Token


def format_literal(value: LiteralValue) -> str:
    """Render a literal the way it would appear in source."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        # repr switches to exponent form below 1e-4, which the lexer rejects.
        return format(Decimal(repr(value)), "f")
    return f'"{value}"'


def to_sexpr(node: object) -> str:
    """Render an expression or statement as a parenthesized prefix form."""
    match node:
        case Literal(value=value):
            return format_literal(value)
        case Grouping(expression=inner):
            return _paren("group", inner)
        case Unary(operator=op, right=right):
            return _paren(op.lexeme, right)
        case Binary(left=left, operator=op, right=right):
            return _paren(op.lexeme, left, right)
        case Variable(name=name):
            return name.lexeme
        case Assign(name=name, value=value):
            return f"(= {name.lexeme} {to_sexpr(value)})"
        case Call(callee=callee, arguments=args):
            return _paren("call", callee, *args)
        case Mark():
            return "<mark>"
        case ExpressionStmt(expression=expr):
            return _paren("expr", expr)
        case PrintStmt(expression=expr):
            return _paren("print", expr)
        case VarStmt(name=name, initializer=init):
            return f"(var {name.lexeme} {to_sexpr(init)})"
        case BlockStmt(statements=stmts):
            return _paren("block", *stmts)
        case IfStmt(condition=cond, then_branch=then, else_branch=otherwise):
            if otherwise is None:
                return _paren("if", cond, then)
            return _paren("if", cond, then, otherwise)
        case FunctionStmt(name=name, params=params, body=body):
            names = " ".join(p.lexeme for p in params)
            parts = [f"(fun {name.lexeme} ({names})"]
            parts.extend(to_sexpr(s) for s in body)
            return " ".join(parts) + ")"
    raise TypeError(f"not an AST node: {type(node).__name__}")


def _paren(name: str, *nodes: object) -> str:
    return "(" + " ".join([name, *(to_sexpr(n) for n in nodes)]) + ")"


def dump_tree(node: object, depth: int = 0) -> list[str]:
    """Return a readable field-by-field dump of an AST node, one line per entry."""
    indent = "  " * depth
    name = type(node).__name__

    if isinstance(node, Token):
        return [f"{indent}{node.kind.name} {node.lexeme!r}"]

    if not is_dataclass(node):
        return [f"{indent}{name}: {node!r}"]

    lines = [f"{indent}{name}"]
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, tuple):
            if value:
                lines.append(f"{indent}  {f.name}:")
                for item in value:
                    lines.extend(dump_tree(item, depth + 2))
            else:
                lines.append(f"{indent}  {f.name}: []")
        elif isinstance(value, Token):
            lines.append(f"{indent}  {f.name}: {value.lexeme!r}")
        elif is_dataclass(value):
            lines.append(f"{indent}  {f.name}:")
            lines.extend(dump_tree(value, depth + 2))
        elif value is not None or isinstance(node, Literal):
            lines.append(f"{indent}  {f.name}: {value!r}")
    return lines
