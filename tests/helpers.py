"""Shared test helpers for the loxparse test suite."""

from __future__ import annotations

import pytest

from loxparse.errors import CompileError
from loxparse.lexer import Lexer
from loxparse.parser import Parser
from loxparse.printer import to_sexpr
from loxparse.tokens import Token, TokenKind


def parse(source: str) -> list:
    """Lex and parse source, return the statement list."""
    tokens = Lexer(source, "<test>").lex()
    return Parser(tokens, "<test>").parse()


def parse_expr(source: str):
    """Parse a single expression statement and return its expression."""
    statements = parse(source)
    assert len(statements) == 1, statements
    return statements[0].expression


def sexprs(source: str) -> list[str]:
    """Parse source and render every top-level statement as an S-expression."""
    return [to_sexpr(stmt) for stmt in parse(source)]


def parse_fails(source: str) -> CompileError:
    """Parse source, asserting it fails. Returns the raised error."""
    with pytest.raises(CompileError) as exc_info:
        parse(source)
    return exc_info.value


def tok(kind: TokenKind, lexeme: str, literal=None, line: int = 1) -> Token:
    """Build a token by hand, bypassing the lexer."""
    return Token(kind, lexeme, literal, line)
