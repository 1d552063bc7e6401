"""Tests for the loxparse CLI, config, and error rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from loxparse import parse_source
from loxparse.cli import main
from loxparse.config import config_for, find_config, load_config
from loxparse.errors import (
    CompileError,
    Diagnostic,
    DiagnosticLabel,
    DiagnosticRenderer,
    Suggestion,
)
from loxparse.project import scaffold

# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("check", "tokens", "view", "format", "highlight", "new"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_check_with_project(self, runner, tmp_project):
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 0
        assert "checking testproj" in result.output
        assert "checked 1 file(s): no errors" in result.output

    def test_check_reports_parse_error(self, runner, tmp_project):
        (tmp_project / "src" / "broken.lox").write_text("print 1\nvar x\n")
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 1
        assert "error[E200]" in result.output
        assert "var error" in result.output
        assert "note: variables need an initializer" in result.output
        assert "help: add an initializer: `var x = <value>`" in result.output
        assert "1 of 2 file(s) failed to parse" in result.output

    def test_check_reports_lex_error(self, runner, tmp_project):
        (tmp_project / "src" / "main.lox").write_text("print 1 ;\n")
        result = runner.invoke(main, ["check", str(tmp_project)])
        assert result.exit_code == 1
        assert "error[E100]" in result.output

    def test_check_single_file(self, runner, tmp_project):
        result = runner.invoke(main, ["check", str(tmp_project / "src" / "main.lox")])
        assert result.exit_code == 0

    def test_check_without_files(self, runner, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path)])
        assert result.exit_code == 0
        assert "no .lox files found" in result.output

    def test_tokens(self, runner, tmp_project):
        result = runner.invoke(main, ["tokens", str(tmp_project / "src" / "main.lox")])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 8
        assert "VAR" in lines[0]
        assert "NUMBER" in lines[3] and "1.0" in lines[3]
        assert lines[4].strip().startswith("2 PRINT")

    def test_view_tree(self, runner, tmp_project):
        result = runner.invoke(main, ["view", str(tmp_project / "src" / "main.lox")])
        assert result.exit_code == 0
        assert "VarStmt" in result.output
        assert "PrintStmt" in result.output

    def test_view_sexpr(self, runner, tmp_project):
        result = runner.invoke(
            main, ["view", "--sexpr", str(tmp_project / "src" / "main.lox")],
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["(var x 1)", "(print (+ x 2))"]

    def test_view_parse_error(self, runner, tmp_path):
        bad = tmp_path / "bad.lox"
        bad.write_text("(1 + 2\n")
        result = runner.invoke(main, ["view", str(bad)])
        assert result.exit_code == 1
        assert "expected ')' after expression" in result.output

    def test_format_check_clean(self, runner, tmp_project):
        result = runner.invoke(main, ["format", "--check", str(tmp_project)])
        assert result.exit_code == 0

    def test_format_check_dirty(self, runner, tmp_project):
        (tmp_project / "src" / "main.lox").write_text("print 1+2\n")
        result = runner.invoke(main, ["format", "--check", str(tmp_project)])
        assert result.exit_code == 1
        assert "would reformat" in result.output

    def test_format_rewrites_with_config_indent(self, runner, tmp_project):
        main_lox = tmp_project / "src" / "main.lox"
        main_lox.write_text("function f(a) { print a }\n")
        result = runner.invoke(main, ["format", str(tmp_project)])
        assert result.exit_code == 0
        assert "formatted" in result.output
        assert main_lox.read_text() == "function f(a) {\n  print a\n}\n"

    def test_format_stdin(self, runner):
        result = runner.invoke(main, ["format", "--stdin"], input="print 1+2")
        assert result.exit_code == 0
        assert result.output == "print 1 + 2\n"

    def test_format_stdin_error(self, runner):
        result = runner.invoke(main, ["format", "--stdin"], input="var x")
        assert result.exit_code == 1
        assert "var error" in result.output

    def test_format_help(self, runner):
        result = runner.invoke(main, ["format", "--help"])
        assert result.exit_code == 0
        assert "--check" in result.output
        assert "--stdin" in result.output

    def test_highlight(self, runner, tmp_project):
        result = runner.invoke(main, ["highlight", str(tmp_project / "src" / "main.lox")])
        assert result.exit_code == 0
        # click strips ANSI codes when not writing to a terminal
        assert result.output == "var x = 1\nprint x + 2\n"

    def test_new_creates_project(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["new", "hello"])
            assert result.exit_code == 0
            assert "created project 'hello'" in result.output

            project = Path("hello")
            assert (project / "lox.toml").exists()
            assert (project / "src" / "main.lox").exists()
            assert (project / ".gitignore").exists()
            assert 'name = "hello"' in (project / "lox.toml").read_text()

            check = runner.invoke(main, ["check", "hello"])
            assert check.exit_code == 0
            assert "checking hello" in check.output

    def test_new_existing_dir_fails(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            Path("hello").mkdir()
            result = runner.invoke(main, ["new", "hello"])
            assert result.exit_code == 1
            assert "already exists" in result.output


# --- Config tests ---


class TestConfig:
    def test_load_config(self, tmp_project):
        config = load_config(tmp_project / "lox.toml")
        assert config.package.name == "testproj"
        assert config.package.version == "1.0.0"
        assert config.format.indent_width == 2
        assert config.output.color is False

    def test_load_config_defaults(self, tmp_path):
        toml = tmp_path / "lox.toml"
        toml.write_text("[package]\n")
        config = load_config(toml)
        assert config.package.name == "untitled"
        assert config.format.indent_width == 4
        assert config.output.color is True

    def test_find_config(self, tmp_project):
        found = find_config(tmp_project / "src")
        assert found == tmp_project / "lox.toml"

    def test_find_config_from_file(self, tmp_project):
        found = find_config(tmp_project / "src" / "main.lox")
        assert found == tmp_project / "lox.toml"

    def test_find_config_not_found(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(FileNotFoundError, match="No lox.toml found"):
            find_config(empty)

    def test_config_for_falls_back_to_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr("loxparse.config.find_config", _raise_not_found)
        config = config_for(tmp_path)
        assert config.package.name == "untitled"


def _raise_not_found(start_path=None):
    raise FileNotFoundError("No lox.toml found in any parent directory")


# --- Scaffolding tests ---


class TestScaffold:
    def test_scaffold_into_parent(self, tmp_path):
        project = scaffold("demo", parent=tmp_path)
        assert project == tmp_path / "demo"
        assert "# demo" in (project / "README.md").read_text()

    def test_scaffold_refuses_existing(self, tmp_path):
        (tmp_path / "demo").mkdir()
        with pytest.raises(FileExistsError):
            scaffold("demo", parent=tmp_path)


# --- Error rendering tests ---


class TestDiagnostics:
    def test_render_error(self):
        diag = Diagnostic(
            code="E200",
            message="var error",
            labels=[DiagnosticLabel("main.lox", 3, "at end of input")],
        )
        output = DiagnosticRenderer(color=False).render(diag)
        assert output.splitlines() == [
            "error[E200]: var error",
            "  --> main.lox:3",
            "     |",
            "     |   at end of input",
        ]

    def test_render_notes_and_suggestion(self):
        diag = Diagnostic(
            code="E200",
            message="var error",
            notes=["variables need an initializer"],
            suggestion=Suggestion("add an initializer", "var x = <value>"),
        )
        output = DiagnosticRenderer(color=False).render(diag)
        assert "  = note: variables need an initializer" in output
        assert "  = help: add an initializer: `var x = <value>`" in output

    def test_render_shows_source_line(self, tmp_path):
        src = tmp_path / "a.lox"
        src.write_text("print 1\nvar x\n")
        diag = Diagnostic(
            code="E200",
            message="var error",
            labels=[DiagnosticLabel(str(src), 2, "")],
        )
        output = DiagnosticRenderer(color=False).render(diag)
        assert "    2 | var x" in output

    def test_render_parser_hints(self, tmp_path):
        src = tmp_path / "a.lox"
        src.write_text("(a) = 1\n")
        with pytest.raises(CompileError) as exc_info:
            parse_source(src.read_text(), str(src))
        output = DiagnosticRenderer(color=False).render(exc_info.value.diagnostics[0])
        assert "error[E200]: invalid assignment target" in output
        assert "    1 | (a) = 1" in output
        assert "note: only a variable name can appear on the left of '='" in output
        assert "help: remove the parentheses: `a = <value>`" in output

    def test_render_color(self):
        diag = Diagnostic(code="E100", message="bad")
        output = DiagnosticRenderer(color=True).render(diag)
        assert "\033[1;31merror[E100]\033[0m" in output

    def test_compile_error_message(self):
        diags = [
            Diagnostic(code="E100", message="one"),
            Diagnostic(code="E100", message="two"),
        ]
        err = CompileError(diags)
        assert str(err) == "2 error(s): one; two"
        assert err.diagnostics == diags
