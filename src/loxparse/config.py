"""TOML config loading for lox.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_NAME = "lox.toml"


@dataclass
class PackageConfig:
    name: str = "untitled"
    version: str = "0.0.0"


@dataclass
class FormatConfig:
    indent_width: int = 4


@dataclass
class OutputConfig:
    color: bool = True


@dataclass
class LoxConfig:
    package: PackageConfig = field(default_factory=PackageConfig)
    format: FormatConfig = field(default_factory=FormatConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find lox.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> LoxConfig:
    """Parse a lox.toml file into a LoxConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = LoxConfig()

    if "package" in data:
        pkg = data["package"]
        config.package = PackageConfig(
            name=pkg.get("name", "untitled"),
            version=pkg.get("version", "0.0.0"),
        )

    if "format" in data:
        fmt = data["format"]
        config.format = FormatConfig(
            indent_width=fmt.get("indent_width", 4),
        )

    if "output" in data:
        out = data["output"]
        config.output = OutputConfig(
            color=out.get("color", True),
        )

    return config


def config_for(start_path: Path | None = None) -> LoxConfig:
    """Load the nearest lox.toml above start_path, or defaults if there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return LoxConfig()
