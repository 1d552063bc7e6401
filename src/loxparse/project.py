"""Project scaffolding for `loxparse new`."""

from __future__ import annotations

from pathlib import Path

_LOX_TOML_TEMPLATE = """\
[package]
name = "{name}"
version = "0.1.0"

[format]
indent_width = 4

[output]
color = true
"""

_MAIN_LOX_TEMPLATE = """\
// Hello from Lox!
function greet(name) {
    print "Hello, " + name
}

greet("Lox")
"""

_GITIGNORE = """\
__pycache__/
"""

_README_TEMPLATE = """\
# {name}

A Lox project.

## Check

```bash
loxparse check
```

## Format

```bash
loxparse format
```
"""


def scaffold(name: str, parent: Path | None = None) -> Path:
    """Create a new Lox project directory. Returns the project path."""
    base = parent or Path.cwd()
    project_dir = base / name

    if project_dir.exists():
        raise FileExistsError(f"Directory '{name}' already exists")

    src_dir = project_dir / "src"
    src_dir.mkdir(parents=True)

    (project_dir / "lox.toml").write_text(_LOX_TOML_TEMPLATE.format(name=name))
    (src_dir / "main.lox").write_text(_MAIN_LOX_TEMPLATE)
    (project_dir / ".gitignore").write_text(_GITIGNORE)
    (project_dir / "README.md").write_text(_README_TEMPLATE.format(name=name))

    return project_dir
