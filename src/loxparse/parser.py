"""Parser for the Lox scripting language.

Transforms a token list into a list of statements by recursive descent,
one method per grammar rule. Precedence is encoded in the call chain:

    assignment -> equality -> comparison -> term -> factor -> unary
               -> call -> primary

Parsing is fail-fast: the first malformed construct aborts the whole parse
with a CompileError and no partial tree is returned.
"""

from __future__ import annotations

from collections.abc import Sequence

from loxparse.ast_nodes import (
    Assign,
    Binary,
    BlockStmt,
    Call,
    Expr,
    ExpressionStmt,
    FunctionStmt,
    Grouping,
    IfStmt,
    Literal,
    Mark,
    PrintStmt,
    Stmt,
    Unary,
    Variable,
    VarStmt,
)
from loxparse.cursor import ParseError, TokenCursor
from loxparse.errors import CompileError, Diagnostic, DiagnosticLabel, Suggestion
from loxparse.tokens import Token, TokenKind

# ── Operator sets per precedence level ──────────────────────────

_EQUALITY_OPS = frozenset({TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL})
_COMPARISON_OPS = frozenset({
    TokenKind.GREATER, TokenKind.GREATER_EQUAL,
    TokenKind.LESS, TokenKind.LESS_EQUAL,
})
_TERM_OPS = frozenset({TokenKind.MINUS, TokenKind.PLUS})
_FACTOR_OPS = frozenset({TokenKind.SLASH, TokenKind.STAR})
_UNARY_OPS = frozenset({TokenKind.BANG, TokenKind.MINUS})
_LITERAL_KINDS = frozenset({TokenKind.NUMBER, TokenKind.STRING})

_FUNCTION = frozenset({TokenKind.FUNCTION})
_VAR = frozenset({TokenKind.VAR})
_IF = frozenset({TokenKind.IF})
_ELSE = frozenset({TokenKind.ELSE})
_PRINT = frozenset({TokenKind.PRINT})
_LEFT_BRACE = frozenset({TokenKind.LEFT_BRACE})
_LEFT_PAREN = frozenset({TokenKind.LEFT_PAREN})
_COMMA = frozenset({TokenKind.COMMA})
_EQUAL = frozenset({TokenKind.EQUAL})
_TRUE = frozenset({TokenKind.TRUE})
_FALSE = frozenset({TokenKind.FALSE})
_IDENTIFIER = frozenset({TokenKind.IDENTIFIER})


class Parser:
    """Parses a list of tokens into Lox statements."""

    def __init__(self, tokens: Sequence[Token], filename: str = "<stdin>") -> None:
        self.cursor = TokenCursor(tokens)
        self.filename = filename

    # ── Top-level parsing ────────────────────────────────────────

    def parse(self) -> list[Stmt]:
        """Parse the entire token stream into top-level statements."""
        try:
            statements: list[Stmt] = []
            while not self.cursor.is_at_end():
                statements.append(self._declaration_with_progress())
            return statements
        except ParseError as e:
            raise CompileError([self._diagnostic(e)]) from None

    def _diagnostic(self, error: ParseError) -> Diagnostic:
        tok = error.token
        if tok is not None:
            label = DiagnosticLabel(self.filename, tok.line, f"found {tok.lexeme!r}")
        else:
            last_line = self.cursor.tokens[-1].line if self.cursor.tokens else 1
            label = DiagnosticLabel(self.filename, last_line, "at end of input")
        return Diagnostic(
            code="E200",
            message=error.message,
            labels=[label],
            notes=error.notes,
            suggestion=error.suggestion,
        )

    def _declaration_with_progress(self) -> Stmt:
        """Parse a declaration, failing if it consumed no tokens.

        A declaration that stops on a token no rule accepts yields a bare
        Mark without advancing; repeating it would never terminate.
        """
        start = self.cursor.current
        stmt = self._declaration()
        if self.cursor.current == start:
            raise ParseError("expected expression", self.cursor.peek())
        return stmt

    # ── Declarations ─────────────────────────────────────────────

    def _declaration(self) -> Stmt:
        if self.cursor.match(_FUNCTION):
            return self._function("function")
        if self.cursor.match(_VAR):
            return self._var_declaration()
        return self._statement()

    def _function(self, kind: str) -> FunctionStmt:
        name = self.cursor.consume(TokenKind.IDENTIFIER, f"expected {kind} name")
        self.cursor.consume(TokenKind.LEFT_PAREN, f"expected '(' after {kind} name")
        params: list[Token] = []
        if not self.cursor.check(TokenKind.RIGHT_PAREN):
            params.append(self.cursor.consume(TokenKind.IDENTIFIER, "expected parameter name"))
            while self.cursor.match(_COMMA):
                params.append(self.cursor.consume(TokenKind.IDENTIFIER, "expected parameter name"))
        self.cursor.consume(TokenKind.RIGHT_PAREN, "expected ')' after parameters")
        self.cursor.consume(TokenKind.LEFT_BRACE, f"expected '{{' before {kind} body")
        body = self._block()
        return FunctionStmt(name, tuple(params), body)

    def _var_declaration(self) -> VarStmt:
        name = self.cursor.consume(TokenKind.IDENTIFIER, "expected variable name")
        # The initializer is mandatory; `var x` alone is rejected.
        if self.cursor.match(_EQUAL):
            return VarStmt(name, self._expression())
        raise ParseError(
            "var error",
            None if self.cursor.is_at_end() else self.cursor.peek(),
            notes=["variables need an initializer"],
            suggestion=Suggestion("add an initializer", f"var {name.lexeme} = <value>"),
        )

    # ── Statements ───────────────────────────────────────────────

    def _statement(self) -> Stmt:
        if self.cursor.match(_IF):
            return self._if_statement()
        if self.cursor.match(_PRINT):
            return PrintStmt(self._expression())
        if self.cursor.match(_LEFT_BRACE):
            return BlockStmt(self._block())
        return ExpressionStmt(self._expression())

    def _if_statement(self) -> IfStmt:
        self.cursor.consume(TokenKind.LEFT_PAREN, "expected '(' after 'if'")
        condition = self._expression()
        self.cursor.consume(TokenKind.RIGHT_PAREN, "expected ')' after if condition")
        then_branch = self._statement()
        # Greedy: an else always belongs to the innermost open if.
        else_branch = self._statement() if self.cursor.match(_ELSE) else None
        return IfStmt(condition, then_branch, else_branch)

    def _block(self) -> tuple[Stmt, ...]:
        """Parse declarations up to the closing brace; the '{' is already consumed."""
        statements: list[Stmt] = []
        while not self.cursor.check(TokenKind.RIGHT_BRACE) and not self.cursor.is_at_end():
            statements.append(self._declaration_with_progress())
        self.cursor.consume(TokenKind.RIGHT_BRACE, "expected '}' after block.")
        return tuple(statements)

    # ── Expressions ──────────────────────────────────────────────

    def _expression(self) -> Expr:
        return self._assignment()

    def _assignment(self) -> Expr:
        expr = self._equality()
        if self.cursor.match(_EQUAL):
            equals = self.cursor.previous()
            value = self._assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise ParseError(
                "invalid assignment target",
                equals,
                notes=["only a variable name can appear on the left of '='"],
                suggestion=_unwrap_target(expr),
            )
        return expr

    def _equality(self) -> Expr:
        expr = self._comparison()
        while self.cursor.match(_EQUALITY_OPS):
            operator = self.cursor.previous()
            expr = Binary(expr, operator, self._comparison())
        return expr

    def _comparison(self) -> Expr:
        expr = self._term()
        while self.cursor.match(_COMPARISON_OPS):
            operator = self.cursor.previous()
            expr = Binary(expr, operator, self._term())
        return expr

    def _term(self) -> Expr:
        expr = self._factor()
        while self.cursor.match(_TERM_OPS):
            operator = self.cursor.previous()
            expr = Binary(expr, operator, self._factor())
        return expr

    def _factor(self) -> Expr:
        expr = self._unary()
        while self.cursor.match(_FACTOR_OPS):
            operator = self.cursor.previous()
            expr = Binary(expr, operator, self._unary())
        return expr

    def _unary(self) -> Expr:
        if self.cursor.match(_UNARY_OPS):
            operator = self.cursor.previous()
            return Unary(operator, self._unary())
        return self._call()

    def _call(self) -> Expr:
        expr = self._primary()
        # f(a)(b) nests left to right: Call(Call(f, [a]), [b])
        while self.cursor.match(_LEFT_PAREN):
            expr = self._finish_call(expr)
        return expr

    def _finish_call(self, callee: Expr) -> Call:
        arguments: list[Expr] = []
        if not self.cursor.check(TokenKind.RIGHT_PAREN):
            arguments.append(self._expression())
            while self.cursor.match(_COMMA):
                arguments.append(self._expression())
        paren = self.cursor.consume(TokenKind.RIGHT_PAREN, "expected ')' after arguments")
        return Call(callee, paren, tuple(arguments))

    def _primary(self) -> Expr:
        if self.cursor.match(_FALSE):
            return Literal(False)
        if self.cursor.match(_TRUE):
            return Literal(True)
        if self.cursor.match(_LITERAL_KINDS):
            return Literal(self.cursor.previous().literal)
        if self.cursor.match(_LEFT_PAREN):
            expr = self._expression()
            self.cursor.consume(TokenKind.RIGHT_PAREN, "expected ')' after expression")
            return Grouping(expr)
        if self.cursor.match(_IDENTIFIER):
            return Variable(self.cursor.previous())
        # TODO: raise "expected expression" here once callers stop relying on Mark.
        return Mark()


def _unwrap_target(target: Expr) -> Suggestion | None:
    """Suggest dropping parentheses around a variable used as a target."""
    while isinstance(target, Grouping):
        target = target.expression
        if isinstance(target, Variable):
            return Suggestion("remove the parentheses", f"{target.name.lexeme} = <value>")
    return None
