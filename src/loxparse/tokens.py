"""Token kinds and token representation for the Lox lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

LiteralValue = Union[float, str, bool, None]


class TokenKind(Enum):
    # Punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()

    # Operators
    MINUS = auto()
    PLUS = auto()
    SLASH = auto()
    STAR = auto()
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    NUMBER = auto()
    STRING = auto()
    TRUE = auto()
    FALSE = auto()
    NIL = auto()
    IDENTIFIER = auto()

    # Keywords
    IF = auto()
    ELSE = auto()
    PRINT = auto()
    VAR = auto()
    FUNCTION = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: LiteralValue = None
    line: int = 1

    def __str__(self) -> str:
        return f"{self.kind.name} {self.lexeme!r}"


KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "print": TokenKind.PRINT,
    "var": TokenKind.VAR,
    "function": TokenKind.FUNCTION,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "nil": TokenKind.NIL,
}

TWO_CHAR_OPERATORS: dict[str, TokenKind] = {
    "!=": TokenKind.BANG_EQUAL,
    "==": TokenKind.EQUAL_EQUAL,
    ">=": TokenKind.GREATER_EQUAL,
    "<=": TokenKind.LESS_EQUAL,
}

SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
    "!": TokenKind.BANG,
    "=": TokenKind.EQUAL,
    ">": TokenKind.GREATER,
    "<": TokenKind.LESS,
}
