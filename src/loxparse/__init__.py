"""Recursive-descent parser for a small Lox-family scripting language."""

from __future__ import annotations

from loxparse.ast_nodes import Stmt
from loxparse.lexer import Lexer
from loxparse.parser import Parser

__version__ = "0.1.0"

__all__ = ["Lexer", "Parser", "parse_source", "__version__"]


def parse_source(source: str, filename: str = "<stdin>") -> list[Stmt]:
    """Lex and parse source text. Raises CompileError on the first problem."""
    tokens = Lexer(source, filename).lex()
    return Parser(tokens, filename).parse()
