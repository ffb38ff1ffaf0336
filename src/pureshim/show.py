"""show.py – Print the function prototypes pureshim extracts from headers.

Useful for checking what ``pureshim generate`` will bind before writing any
Go code: one table per header with the raw C return type, the parameters,
and the mapped Go signature.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from tree_sitter import QueryError

from pureshim.cli import ConfigOption, JsonOption, error_exit, get_config, json_print, read_source
from pureshim.query import extract_functions
from pureshim.reducer import FunctionRecord
from pureshim.shim import render_binding
from pureshim.type_map import TypeMap

app = typer.Typer(help="Show extracted C function prototypes.", rich_markup_mode="rich")


def _render_table(
    console: Console, path: Path, functions: list[FunctionRecord], type_map: TypeMap
) -> None:
    tbl = Table(
        title=f"[bold]{path}[/]", show_header=True, header_style="bold", border_style="dim"
    )
    tbl.add_column("Name", style="cyan", no_wrap=True)
    tbl.add_column("Returns")
    tbl.add_column("Params")
    tbl.add_column("Go binding", style="green")

    for func in functions:
        params = ", ".join(f"{p.type} {p.name}" for p in func.params) or "[dim]-[/]"
        ret = func.return_type or "[dim]-[/]"
        tbl.add_row(func.name, ret, params, render_binding(func, type_map))
    console.print(tbl)


@app.command()
def main(
    files: list[Path] = typer.Argument(..., help="C header files to inspect"),
    json_output: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """List the function prototypes found in each header."""
    cfg = get_config(config, json_mode=json_output)
    type_map = cfg.type_map()
    console = Console()

    report = []
    for path in files:
        source = read_source(path, json_mode=json_output)
        try:
            functions = extract_functions(source)
        except (QueryError, ValueError) as exc:
            error_exit(
                f"Failed to get functions from file source {path}: {exc}",
                json_mode=json_output,
            )

        if json_output:
            report.append({"source": str(path), "functions": [f.to_dict() for f in functions]})
        elif functions:
            _render_table(console, path, functions, type_map)
        else:
            console.print(f"[dim]{path}: no function prototypes found[/dim]", soft_wrap=True)

    if json_output:
        json_print(report)
