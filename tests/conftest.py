"""Shared pytest fixtures for the loxparse test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a minimal Lox project in a temp dir."""
    (tmp_path / "lox.toml").write_text(
        '[package]\nname = "testproj"\nversion = "1.0.0"\n'
        "[format]\nindent_width = 2\n"
        "[output]\ncolor = false\n"
    )
    src = tmp_path / "src"
    src.mkdir()
    (src / "main.lox").write_text("var x = 1\nprint x + 2\n")
    return tmp_path
