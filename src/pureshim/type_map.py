"""type_map.py – Map C type text onto purego-compatible Go types.

The mapping is table-driven: a :class:`TypeMap` holds the base-type table and
the attribute macros to discard, and :func:`map_c_type` applies it.  Two
pointer-aware rules are checked before the table:

* ``void *``  → ``unsafe.Pointer``
* ``char *``  → ``string`` (purego marshals C strings to Go strings)

Any base type not in the table is assumed to be a struct/typedef name that
already exists in the Go package and passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

OPAQUE_POINTER = "unsafe.Pointer"
STRING = "string"

# C ``long`` width is platform dependent; 32 bits is the historical default.
LONG_WIDTHS = (32, 64)

BASE_TYPES: dict[str, str] = {
    "int": "int32",
    "unsigned int": "uint32",
    "float": "float32",
    "double": "float64",
    "bool": "bool",
    "char": "byte",
    "unsigned char": "uint8",
    # fixed-width and short/long long spellings
    "short": "int16",
    "unsigned short": "uint16",
    "long long": "int64",
    "unsigned long long": "uint64",
    "int8_t": "int8",
    "uint8_t": "uint8",
    "int16_t": "int16",
    "uint16_t": "uint16",
    "int32_t": "int32",
    "uint32_t": "uint32",
    "int64_t": "int64",
    "uint64_t": "uint64",
    "size_t": "uint",
}


DEFAULT_STRIP_MACROS: tuple[str, ...] = ("RLAPI",)
QUALIFIERS = frozenset({"const"})


def valid_long_width(width: object) -> bool:
    """True for an int (not bool) listed in ``LONG_WIDTHS``; rejects ``64.0``."""
    return isinstance(width, int) and not isinstance(width, bool) and width in LONG_WIDTHS


@dataclass(frozen=True)
class TypeMap:
    """Settings for :func:`map_c_type`."""

    strip_macros: tuple[str, ...] = DEFAULT_STRIP_MACROS
    long_width: int = 32
    table: Mapping[str, str] = field(default_factory=lambda: dict(BASE_TYPES), hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "table", MappingProxyType(dict(self.table)))
        if not valid_long_width(self.long_width):
            raise ValueError(f"long_width must be one of {LONG_WIDTHS}, got {self.long_width}")

    def lookup(self, base: str) -> str | None:
        if base == "long":
            return f"int{self.long_width}"
        if base == "unsigned long":
            return f"uint{self.long_width}"
        return self.table.get(base)


DEFAULT_TYPE_MAP = TypeMap()


def base_type(ctype: str, strip_macros: tuple[str, ...] = DEFAULT_STRIP_MACROS) -> str:
    """Strip pointer markers, ``const`` and attribute macros from *ctype*."""
    dropped = QUALIFIERS.union(strip_macros)
    tokens = ctype.replace("*", " ").split()
    return " ".join(tok for tok in tokens if tok not in dropped)


def map_c_type(ctype: str, is_return: bool = False, type_map: TypeMap = DEFAULT_TYPE_MAP) -> str:
    """Return the Go type for C type text *ctype*.

    An empty string means "no type", which only happens for a ``void``
    return.  Never raises.
    """
    is_pointer = "*" in ctype
    base = base_type(ctype, type_map.strip_macros)

    if is_pointer and base == "void":
        return OPAQUE_POINTER
    if is_pointer and base == "char":
        return STRING

    if base == "void":
        if is_return:
            return ""
        mapped = OPAQUE_POINTER
    else:
        mapped = type_map.lookup(base) or base

    if not is_pointer or mapped in (OPAQUE_POINTER, STRING):
        return mapped
    return f"*{mapped}"
