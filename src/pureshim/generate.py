"""generate.py – Generate purego binding files from C headers.

Each input header is parsed with tree-sitter, its function prototypes are
reduced to records, and one ``<stem>.go`` file is written to the output
directory.  Files are processed in the order given; the first failure
stops the run with exit code 1 (files already written are left in place).
"""

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from tree_sitter import QueryError

from pureshim.cli import ConfigOption, JsonOption, error_exit, get_config, json_print, read_source
from pureshim.query import extract_functions
from pureshim.shim import generate_shim, output_path, render_shim
from pureshim.type_map import TypeMap

console = Console(stderr=True)

app = typer.Typer(
    help="Generate purego bindings from C header files.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

pureshim generate --pkg raylib --outdir internal/raylib raylib.h

pureshim generate --pkg raylib --outdir out raylib.h rlgl.h raymath.h

pureshim generate --dry-run --pkg raylib --outdir out raylib.h

[dim]--pkg and --outdir may instead come from [generate] in pureshim.toml.
Command-line flags override the config file.[/dim]""",
)


@app.command()
def main(
    files: list[Path] = typer.Argument(..., help="C header files to generate bindings from"),
    pkg: Optional[str] = typer.Option(
        None, "--pkg", help="Go package the generated files belong to"
    ),
    outdir: Optional[Path] = typer.Option(None, "--outdir", help="Output directory"),
    comments: Optional[bool] = typer.Option(
        None, "--comments/--no-comments", help="Copy trailing C comments above each binding"
    ),
    long_width: Optional[int] = typer.Option(
        None, "--long-width", help="Width of C 'long' in bits (32 or 64)"
    ),
    strip_macro: Optional[list[str]] = typer.Option(
        None, "--strip-macro", help="Attribute macro to drop from types (repeatable)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print generated Go instead of writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-function progress"),
    json_output: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Generate one purego binding file per C header."""
    cfg = get_config(config, json_mode=json_output)

    package = pkg or cfg.package
    out_dir = outdir or cfg.outdir
    if not package:
        error_exit("Missing --pkg (or 'package' in pureshim.toml)", json_mode=json_output)
    if out_dir is None:
        error_exit("Missing --outdir (or 'outdir' in pureshim.toml)", json_mode=json_output)

    try:
        type_map = TypeMap(
            strip_macros=tuple(strip_macro) if strip_macro else cfg.strip_macros,
            long_width=long_width if long_width is not None else cfg.long_width,
        )
    except ValueError as exc:
        error_exit(str(exc), json_mode=json_output)
    emit_comments = cfg.comments if comments is None else comments

    results: list[dict[str, Any]] = []
    for path in files:
        source = read_source(path, json_mode=json_output)

        try:
            functions = extract_functions(source)
        except (QueryError, ValueError) as exc:
            error_exit(
                f"Failed to get functions from file source {path}: {exc}",
                json_mode=json_output,
            )

        if verbose and not json_output:
            console.print(f"[bold]{path}[/bold]: {len(functions)} functions", highlight=False)
            for func in functions:
                console.print(f"  [dim]{func.name}[/dim]", highlight=False)

        entry: dict[str, Any] = {
            "source": str(path),
            "output": str(output_path(out_dir, path)),
            "functions": [f.name for f in functions],
        }

        if dry_run:
            text = render_shim(functions, path, package, type_map=type_map, comments=emit_comments)
            if json_output:
                entry["shim"] = text
            else:
                typer.echo(text, nl=False)
        else:
            try:
                generate_shim(
                    functions, out_dir, path, package, type_map=type_map, comments=emit_comments
                )
            except OSError as exc:
                error_exit(
                    f"Failed to generate purego shims for file {path}: {exc}",
                    json_mode=json_output,
                )
        results.append(entry)

    if json_output:
        json_print(
            {
                "package": package,
                "outdir": str(out_dir),
                "dry_run": dry_run,
                "files": results,
            }
        )
        return

    if not dry_run:
        total = sum(len(r["functions"]) for r in results)
        typer.echo(f"Generated {total} bindings in {len(results)} files under {out_dir}", err=True)


def main_entry() -> None:
    """Package entry point for ``pureshim-generate``."""
    app()
