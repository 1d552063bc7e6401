"""loxparse command-line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from loxparse import __version__
from loxparse.ast_nodes import Stmt
from loxparse.config import config_for
from loxparse.errors import CompileError, DiagnosticRenderer
from loxparse.lexer import Lexer
from loxparse.parser import Parser
from loxparse.project import scaffold


def _lox_files(target: Path) -> list[Path]:
    """Collect .lox files under target, preferring a src/ directory."""
    if target.is_file():
        return [target]
    src_dir = target / "src"
    if src_dir.is_dir():
        target = src_dir
    return sorted(target.rglob("*.lox"))


def _parse_file(path: Path, renderer: DiagnosticRenderer) -> list[Stmt] | None:
    """Lex and parse one file, echoing diagnostics. Returns None on failure."""
    source = path.read_text()
    filename = str(path)
    try:
        tokens = Lexer(source, filename).lex()
        return Parser(tokens, filename).parse()
    except CompileError as e:
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        return None


@click.group()
@click.version_option(__version__, prog_name="loxparse")
def main() -> None:
    """Parser toolkit for the Lox scripting language."""


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
def check(path: str) -> None:
    """Lex and parse every .lox file without running anything."""
    target = Path(path)
    config = config_for(target)
    renderer = DiagnosticRenderer(color=config.output.color)

    lox_files = _lox_files(target)
    if not lox_files:
        click.echo("warning: no .lox files found", err=True)
        return

    click.echo(f"checking {config.package.name}...")
    failed = 0
    for lox_file in lox_files:
        if _parse_file(lox_file, renderer) is None:
            failed += 1

    if failed:
        click.echo(f"{failed} of {len(lox_files)} file(s) failed to parse", err=True)
        raise SystemExit(1)
    click.echo(f"checked {len(lox_files)} file(s): no errors")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def tokens(file: str) -> None:
    """Print the token stream of a Lox source file."""
    path = Path(file)
    renderer = DiagnosticRenderer(color=config_for(path).output.color)
    try:
        toks = Lexer(path.read_text(), file).lex()
    except CompileError as e:
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True)
        raise SystemExit(1)

    for tok in toks:
        line = f"{tok.line:>4} {tok.kind.name:<14} {tok.lexeme!r}"
        if tok.literal is not None:
            line += f" {tok.literal!r}"
        click.echo(line)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--sexpr", is_flag=True, help="Print one S-expression per statement.")
def view(file: str, sexpr: bool) -> None:
    """View the AST of a Lox source file."""
    from loxparse.printer import dump_tree, to_sexpr

    path = Path(file)
    renderer = DiagnosticRenderer(color=config_for(path).output.color)
    statements = _parse_file(path, renderer)
    if statements is None:
        raise SystemExit(1)

    for stmt in statements:
        if sexpr:
            click.echo(to_sexpr(stmt))
        else:
            for line in dump_tree(stmt):
                click.echo(line)


@main.command(name="format")
@click.argument("path", default=".", type=click.Path(exists=True))
@click.option("--check", is_flag=True, help="Check formatting without modifying files.")
@click.option("--stdin", "use_stdin", is_flag=True, help="Read from stdin, write to stdout.")
def format_cmd(path: str, check: bool, use_stdin: bool) -> None:
    """Format Lox source files."""
    from loxparse.formatter import LoxFormatter

    config = config_for(Path(path))
    formatter = LoxFormatter(indent_width=config.format.indent_width)
    renderer = DiagnosticRenderer(color=config.output.color)

    if use_stdin:
        source = sys.stdin.read()
        try:
            statements = Parser(Lexer(source, "<stdin>").lex(), "<stdin>").parse()
        except CompileError as e:
            for diag in e.diagnostics:
                click.echo(renderer.render(diag), err=True)
            raise SystemExit(1)
        formatted = formatter.format(statements)
        if check:
            if formatted != source:
                raise SystemExit(1)
        else:
            click.echo(formatted, nl=False)
        return

    lox_files = _lox_files(Path(path))
    if not lox_files:
        click.echo("no .lox files found", err=True)
        return

    needs_formatting = False
    for lox_file in lox_files:
        statements = _parse_file(lox_file, renderer)
        if statements is None:
            continue

        formatted = formatter.format(statements)
        if formatted != lox_file.read_text():
            if check:
                click.echo(f"would reformat {lox_file}")
                needs_formatting = True
            else:
                lox_file.write_text(formatted)
                click.echo(f"formatted {lox_file}")

    if check and needs_formatting:
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def highlight(file: str) -> None:
    """Print a Lox source file with terminal syntax highlighting."""
    from pygments import highlight as pygments_highlight
    from pygments.formatters import TerminalFormatter

    from loxparse.highlight import LoxLexer

    source = Path(file).read_text()
    click.echo(pygments_highlight(source, LoxLexer(), TerminalFormatter()), nl=False)


@main.command()
@click.argument("name")
def new(name: str) -> None:
    """Create a new Lox project."""
    try:
        project_dir = scaffold(name)
        click.echo(f"created project '{name}' at {project_dir}")
    except FileExistsError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
