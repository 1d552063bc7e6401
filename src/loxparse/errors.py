"""Diagnostics raised by the lexer and parser, and their terminal rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# ANSI color codes
_RED = "\033[1;31m"
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_GREEN = "\033[1;32m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Points at a source line.

    Tokens only carry a line number, so labels do not track columns.
    """

    file: str
    line: int
    message: str


@dataclass(frozen=True)
class Suggestion:
    """A suggested rewrite of the offending source."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """One error: code E1xx for the lexer, E2xx for the parser."""

    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    suggestion: Suggestion | None = None


class DiagnosticRenderer:
    """Renders diagnostics in Rust-style format, optionally colored.

        error[E200]: var error
          --> main.lox:2
           |
         2 | var x
           |   at end of input
          = note: variables need an initializer
          = help: add an initializer: `var x = 0`
    """

    def __init__(self, *, color: bool = True) -> None:
        self.color = color
        self._sources: dict[str, list[str]] = {}

    def _paint(self, text: str, code: str) -> str:
        return f"{code}{text}{_RESET}" if self.color else text

    def _source_line(self, filename: str, line: int) -> str | None:
        if filename not in self._sources:
            path = Path(filename)
            try:
                self._sources[filename] = path.read_text().splitlines() if path.is_file() else []
            except OSError:
                self._sources[filename] = []
        lines = self._sources[filename]
        return lines[line - 1] if 1 <= line <= len(lines) else None

    def render(self, diag: Diagnostic) -> str:
        out = [
            self._paint(f"error[{diag.code}]", _RED) + self._paint(f": {diag.message}", _BOLD),
        ]
        for label in diag.labels:
            out.extend(self._render_label(label))
        for note in diag.notes:
            out.append(f"  {self._paint('=', _BLUE)} note: {note}")
        if diag.suggestion is not None:
            fix = diag.suggestion
            out.append(
                f"  {self._paint('=', _BLUE)} help: {fix.message}: "
                + self._paint(f"`{fix.replacement}`", _GREEN)
            )
        return "\n".join(out)

    def _render_label(self, label: DiagnosticLabel) -> list[str]:
        bar = self._paint("   |", _BLUE)
        lines = [f"  {self._paint('-->', _BLUE)} {label.file}:{label.line}", f"  {bar}"]
        text = self._source_line(label.file, label.line)
        if text is not None:
            lines.append(f"  {self._paint(f'{label.line:>3} |', _BLUE)} {text}")
        if label.message:
            lines.append(f"  {bar}   {self._paint(label.message, _RED)}")
        return lines


class CompileError(Exception):
    """Lexing or parsing failure carrying one or more diagnostics."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
