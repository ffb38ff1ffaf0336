"""shim.py – Render purego binding stubs for extracted C prototypes.

For ``raylib.h`` with package ``raylib`` the generated ``raylib.go`` looks
like::

    package raylib

    import (
    	"unsafe"
    	"github.com/ebitengine/purego"
    )

    var InitWindow func(width int32, height int32, title string)
    var GetRandomValue func(min int32, max int32) int32

    func Initraylib(handle uintptr) {
    	purego.RegisterLibFunc(&InitWindow, handle, "InitWindow")
    	purego.RegisterLibFunc(&GetRandomValue, handle, "GetRandomValue")
    }

Parameter names that clash with Go keywords or predeclared identifiers are
prefixed with ``_``; the symbol string passed to ``RegisterLibFunc`` is
always the original C name.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from pureshim.reducer import FunctionRecord
from pureshim.type_map import DEFAULT_TYPE_MAP, TypeMap, map_c_type
from pureshim.utils import atomic_write_text

PUREGO_IMPORT = "github.com/ebitengine/purego"
UNSAFE_IMPORT = "unsafe"
GO_EXT = ".go"

RESERVED_WORDS: frozenset[str] = frozenset(
    {
        # keywords
        "break", "default", "func", "interface", "select",
        "case", "defer", "go", "map", "struct",
        "chan", "else", "goto", "package", "switch",
        "const", "fallthrough", "if", "range", "type",
        "continue", "for", "import", "return", "var",
        # predeclared identifiers
        "true", "false", "iota", "nil",
        "append", "cap", "close", "complex", "copy", "delete",
        "imag", "len", "make", "new", "panic",
        "print", "println", "real", "recover",
    }
)

_NON_IDENT_RE = re.compile(r"[^0-9A-Za-z_]")


def go_param_name(name: str) -> str:
    """Prefix *name* with ``_`` if it is reserved in Go."""
    if name in RESERVED_WORDS:
        return f"_{name}"
    return name


def source_stem(source_path: str | Path) -> str:
    return Path(source_path).stem


def init_func_name(source_path: str | Path) -> str:
    """Name of the generated initializer, e.g. ``Initraylib`` for ``raylib.h``."""
    return "Init" + _NON_IDENT_RE.sub("_", source_stem(source_path))


def output_path(out_dir: str | Path, source_path: str | Path) -> Path:
    return Path(out_dir) / (source_stem(source_path) + GO_EXT)


def render_binding(func: FunctionRecord, type_map: TypeMap = DEFAULT_TYPE_MAP) -> str:
    """Render the ``var Name func(...) Ret`` line for one record."""
    args = ", ".join(
        f"{go_param_name(p.name)} {map_c_type(p.type, False, type_map)}" for p in func.params
    )
    line = f"var {func.name} func({args})"
    ret = map_c_type(func.return_type, True, type_map)
    if ret:
        line += f" {ret}"
    return line


def render_shim(
    functions: Sequence[FunctionRecord],
    source_path: str | Path,
    package: str,
    type_map: TypeMap = DEFAULT_TYPE_MAP,
    comments: bool = False,
) -> str:
    """Return the Go source for *functions* extracted from *source_path*."""
    lines = [
        f"package {package}",
        "",
        "import (",
        f'\t"{UNSAFE_IMPORT}"',
        f'\t"{PUREGO_IMPORT}"',
        ")",
        "",
    ]
    for func in functions:
        if comments and func.comment:
            lines.append(func.comment.strip())
        lines.append(render_binding(func, type_map))

    lines.append("")
    lines.append(f"func {init_func_name(source_path)}(handle uintptr) {{")
    for func in functions:
        lines.append(f'\tpurego.RegisterLibFunc(&{func.name}, handle, "{func.name}")')
    lines.append("}")
    return "\n".join(lines) + "\n"


def generate_shim(
    functions: Sequence[FunctionRecord],
    out_dir: str | Path,
    source_path: str | Path,
    package: str,
    type_map: TypeMap = DEFAULT_TYPE_MAP,
    comments: bool = False,
) -> Path:
    """Write the shim for *source_path* into *out_dir* and return its path.

    Raises ``OSError`` if the directory cannot be created or the file
    cannot be written.
    """
    text = render_shim(functions, source_path, package, type_map=type_map, comments=comments)
    out_path = output_path(out_dir, source_path)
    atomic_write_text(out_path, text)
    return out_path
