"""Positional view over a token list, shared by the parser's grammar rules."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from loxparse.errors import Suggestion
from loxparse.tokens import Token, TokenKind


class ParseError(Exception):
    """Aborts the current parse; converted to CompileError by Parser.parse."""

    def __init__(
        self,
        message: str,
        token: Token | None,
        *,
        notes: list[str] | None = None,
        suggestion: Suggestion | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.token = token  # None when input ran out
        self.notes = notes or []
        self.suggestion = suggestion


class TokenCursor:
    """Read-only token sequence plus a monotonically advancing index.

    End of input is purely positional: there is no EOF token, so ``peek``
    must only be called after ``is_at_end`` or ``check`` has been consulted.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = tuple(tokens)
        self.current = 0

    def is_at_end(self) -> bool:
        return self.current == len(self.tokens)

    def peek(self) -> Token:
        if self.is_at_end():
            raise IndexError("peek past end of token stream")
        return self.tokens[self.current]

    def previous(self) -> Token:
        if self.current == 0:
            raise IndexError("no token has been consumed yet")
        return self.tokens[self.current - 1]

    def check(self, kind: TokenKind) -> bool:
        if self.is_at_end():
            return False
        return self.peek().kind == kind

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def match(self, kinds: Collection[TokenKind]) -> bool:
        """Consume the current token if its kind is one of ``kinds``."""
        if any(self.check(kind) for kind in kinds):
            self.advance()
            return True
        return False

    def consume(self, kind: TokenKind, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(message, None if self.is_at_end() else self.peek())
