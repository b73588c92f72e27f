"""TOML config loading for gwn.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

OUTPUT_FORMATS = ("canonical", "tree")


@dataclass
class ReplConfig:
    prompt: str = "gwn > "


@dataclass
class DiagnosticsConfig:
    color: bool = True


@dataclass
class OutputConfig:
    format: str = "canonical"


@dataclass
class GwnConfig:
    repl: ReplConfig = field(default_factory=ReplConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find gwn.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / "gwn.toml"
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError("No gwn.toml found in any parent directory")
        path = parent


def load_config(path: Path) -> GwnConfig:
    """Parse a gwn.toml file into a GwnConfig. Raises ValueError on bad values."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = GwnConfig()

    if "repl" in data:
        config.repl = ReplConfig(
            prompt=data["repl"].get("prompt", "gwn > "),
        )

    if "diagnostics" in data:
        config.diagnostics = DiagnosticsConfig(
            color=data["diagnostics"].get("color", True),
        )

    if "output" in data:
        fmt = data["output"].get("format", "canonical")
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(
                f"{path}: output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}"
            )
        config.output = OutputConfig(format=fmt)

    return config


def discover_config(start_path: Path | None = None) -> GwnConfig:
    """Load the nearest gwn.toml, or defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return GwnConfig()
