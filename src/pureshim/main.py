"""main.py – Umbrella CLI entry point for pureshim.

Lazily imports and registers the subcommand typer apps so that a missing
optional dependency (tree-sitter, tree-sitter-c) reports a clear error
instead of preventing the whole CLI from loading.
"""

import importlib
import sys
from collections.abc import Callable

import typer

app = typer.Typer(
    help="Generate purego bindings for C header files without cgo.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  pureshim show raylib.h                              Inspect extracted prototypes
  pureshim generate --pkg raylib --outdir out raylib.h  Write out/raylib.go

[dim]Defaults for --pkg, --outdir and type mapping can live in pureshim.toml.
Run 'pureshim <cmd> --help' for details.[/dim]""",
)

# Single-command modules – registered as flat commands via app.command().
_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("generate", "pureshim.generate", "Generate purego bindings from C headers."),
    ("show", "pureshim.show", "Show extracted C function prototypes."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        _epilog = getattr(_mod.app.info, "epilog", None)
        if not isinstance(_epilog, str):
            _epilog = None
        app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
