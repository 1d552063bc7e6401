"""Pygments lexer for the Lox scripting language."""

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)


class LoxLexer(RegexLexer):
    """Pygments lexer for the Lox scripting language."""

    name = "Lox"
    aliases = ["lox"]
    filenames = ["*.lox"]
    mimetypes = ["text/x-lox"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Line comments (// ...)
            (r"//.*$", Comment.Single),
            # Strings have no escapes and may span lines
            (r'"[^"]*"', String.Double),
            # Numbers
            (r"[0-9]+\.[0-9]+", Number.Float),
            (r"[0-9]+", Number.Integer),
            # Function declarations: highlight the declared name
            (
                r"\b(function)(\s+)([A-Za-z_][A-Za-z0-9_]*)",
                bygroups(Keyword.Declaration, Text, Name.Function),
            ),
            (
                words(("function", "var"), prefix=r"\b", suffix=r"\b"),
                Keyword.Declaration,
            ),
            (
                words(("if", "else", "print"), prefix=r"\b", suffix=r"\b"),
                Keyword,
            ),
            (
                words(("true", "false", "nil"), prefix=r"\b", suffix=r"\b"),
                Keyword.Constant,
            ),
            # Identifiers
            (r"[A-Za-z_][A-Za-z0-9_]*", Name),
            # Operators
            (r"!=|==|>=|<=|[-+*/!=<>]", Operator),
            # Punctuation
            (r"[(){},]", Punctuation),
        ],
    }
