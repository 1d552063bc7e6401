"""Lexer for the Lox scripting language.

Produces the flat token list the parser consumes. No end-of-file token is
appended: the parser detects end of input by position.
"""

from __future__ import annotations

from loxparse.errors import CompileError, Diagnostic, DiagnosticLabel
from loxparse.tokens import (
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS,
    LiteralValue,
    Token,
    TokenKind,
)


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_alpha(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


class Lexer:
    """Tokenizes Lox source code."""

    def __init__(self, source: str, filename: str = "<stdin>") -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.tokens: list[Token] = []
        self.diagnostics: list[Diagnostic] = []

    def lex(self) -> list[Token]:
        """Tokenize the entire source and return the token list."""
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if ch == '\n':
                self._advance()
            elif ch in (' ', '\t', '\r'):
                self._advance()
            elif ch == '/' and self._peek(1) == '/':
                self._skip_line_comment()
            elif ch == '"':
                self._lex_string()
            elif _is_digit(ch):
                self._lex_number()
            elif _is_alpha(ch):
                self._lex_identifier()
            else:
                self._lex_operator_or_punct()

        if self.diagnostics:
            raise CompileError(self.diagnostics)
        return self.tokens

    # ── Helpers ───────────────────────────────────────────────────

    def _peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def _advance(self) -> str:
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
        return ch

    def _is_ident_char(self) -> bool:
        ch = self.source[self.pos]
        return _is_alpha(ch) or _is_digit(ch)

    def _emit(self, kind: TokenKind, lexeme: str, line: int,
              literal: LiteralValue = None) -> Token:
        tok = Token(kind, lexeme, literal, line)
        self.tokens.append(tok)
        return tok

    def _error(self, message: str, line: int) -> None:
        self.diagnostics.append(
            Diagnostic(
                code="E100",
                message=message,
                labels=[DiagnosticLabel(self.filename, line, "")],
            )
        )

    def _skip_line_comment(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] != '\n':
            self._advance()

    # ── Literals ─────────────────────────────────────────────────

    def _lex_string(self) -> None:
        start_line = self.line
        start = self.pos
        self._advance()  # skip opening "
        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self._advance()

        if self.pos >= len(self.source):
            self._error("unterminated string literal", start_line)
            return

        self._advance()  # skip closing "
        lexeme = self.source[start:self.pos]
        self._emit(TokenKind.STRING, lexeme, start_line, lexeme[1:-1])

    def _lex_number(self) -> None:
        start = self.pos
        while self.pos < len(self.source) and _is_digit(self.source[self.pos]):
            self._advance()

        # A trailing dot without digits is not part of the number.
        if self._peek() == '.' and _is_digit(self._peek(1)):
            self._advance()  # .
            while self.pos < len(self.source) and _is_digit(self.source[self.pos]):
                self._advance()

        lexeme = self.source[start:self.pos]
        self._emit(TokenKind.NUMBER, lexeme, self.line, float(lexeme))

    def _lex_identifier(self) -> None:
        start = self.pos
        while self.pos < len(self.source) and self._is_ident_char():
            self._advance()
        word = self.source[start:self.pos]
        self._emit(KEYWORDS.get(word, TokenKind.IDENTIFIER), word, self.line)

    # ── Operators and Punctuation ────────────────────────────────

    def _lex_operator_or_punct(self) -> None:
        ch = self.source[self.pos]
        two = ch + self._peek(1)
        if two in TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            self._emit(TWO_CHAR_OPERATORS[two], two, self.line)
            return

        self._advance()
        kind = SINGLE_CHAR_TOKENS.get(ch)
        if kind is None:
            self._error(f"unexpected character: {ch!r}", self.line)
            return
        self._emit(kind, ch, self.line)
