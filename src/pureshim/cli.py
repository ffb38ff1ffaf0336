"""Shared CLI utilities for pureshim commands.

Provides the common ``--config`` option, config loading that turns config
errors into clean exits, and the standard error / JSON output helpers.

Usage in a command module::

    import typer
    from pureshim.cli import ConfigOption, error_exit, get_config, json_print

    app = typer.Typer()

    @app.command()
    def main(config: Path | None = ConfigOption) -> None:
        cfg = get_config(config)
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from pureshim.config import ShimConfig, load_config

ConfigOption: Path | None = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to pureshim.toml (default: search upward from the current directory).",
)

JsonOption: bool = typer.Option(False, "--json", help="Output structured JSON")

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(
            f"[red bold]error:[/red bold] {escape(msg)}", highlight=False, soft_wrap=True
        )
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def get_config(path: Path | None = None, *, json_mode: bool = False) -> ShimConfig:
    """Load the project config, exiting with a message if it is unusable."""
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError) as exc:
        error_exit(str(exc), json_mode=json_mode)


def read_source(path: Path, *, json_mode: bool = False) -> bytes:
    """Read a header file's bytes, exiting with the path on failure."""
    try:
        return path.read_bytes()
    except OSError as exc:
        error_exit(f"Failed to read file {path}: {exc}", json_mode=json_mode)
