"""Optional project configuration for pureshim.

A ``pureshim.toml`` in the current directory (or any parent) supplies
defaults for ``pureshim generate`` so that repeated runs over the same
headers don't need every flag spelled out::

    [generate]
    package = "raylib"
    outdir = "internal/raylib"
    strip_macros = ["RLAPI"]
    long_width = 32
    comments = false

Command-line flags always win over the file.  A missing file is fine;
a malformed one raises ``ValueError``.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pureshim.type_map import DEFAULT_STRIP_MACROS, LONG_WIDTHS, TypeMap, valid_long_width

CONFIG_NAME = "pureshim.toml"


@dataclass
class ShimConfig:
    """Parsed ``[generate]`` settings."""

    # Directory holding pureshim.toml (None when no file was found)
    root: Optional[Path] = None

    package: Optional[str] = None
    outdir: Optional[Path] = None
    strip_macros: tuple[str, ...] = field(default_factory=lambda: DEFAULT_STRIP_MACROS)
    long_width: int = 32
    comments: bool = False

    def type_map(self) -> TypeMap:
        return TypeMap(strip_macros=self.strip_macros, long_width=self.long_width)


def _resolve(root: Path, rel: Optional[str]) -> Optional[Path]:
    """Resolve a path relative to the config file's directory."""
    if rel is None:
        return None
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from *start* (or cwd) looking for ``pureshim.toml``."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        path = candidate / CONFIG_NAME
        if path.is_file():
            return path
        if candidate == candidate.parent:
            return None
        candidate = candidate.parent


def load_config(path: Optional[Path] = None) -> ShimConfig:
    """Load pureshim settings.

    Args:
        path: Explicit config file.  Must exist if given.  When ``None``
              the file is searched for with :func:`find_config`, and an
              empty :class:`ShimConfig` is returned if there is none.
    """
    if path is None:
        path = find_config()
        if path is None:
            return ShimConfig()
    elif not path.is_file():
        raise FileNotFoundError(f"Config not found: {path}")

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{path}: {exc}") from exc

    gen = raw.get("generate", {})
    if not isinstance(gen, dict):
        raise ValueError(f"{path}: [generate] must be a table")

    root = path.parent
    long_width = gen.get("long_width", 32)
    if not valid_long_width(long_width):
        raise ValueError(f"{path}: long_width must be one of {LONG_WIDTHS}, got {long_width!r}")

    strip_macros = gen.get("strip_macros", list(DEFAULT_STRIP_MACROS))
    if not isinstance(strip_macros, list) or not all(isinstance(m, str) for m in strip_macros):
        raise ValueError(f"{path}: strip_macros must be a list of strings")

    comments = gen.get("comments", False)
    if not isinstance(comments, bool):
        raise ValueError(f"{path}: comments must be true or false, got {comments!r}")

    for key in ("package", "outdir"):
        if key in gen and not isinstance(gen[key], str):
            raise ValueError(f"{path}: {key} must be a string, got {gen[key]!r}")

    return ShimConfig(
        root=root,
        package=gen.get("package"),
        outdir=_resolve(root, gen.get("outdir")),
        strip_macros=tuple(strip_macros),
        long_width=long_width,
        comments=comments,
    )
