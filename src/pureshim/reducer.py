"""reducer.py – Rebuild function records from a tree-sitter capture stream.

The declaration query in :mod:`pureshim.query` yields a flat, ordered stream
of named captures (type tokens, names, parameter tokens, declaration
boundaries).  There is no explicit end-of-function marker, so records are
closed lazily: a function is finalized when the *next* declaration boundary
arrives (or the stream ends), and a parameter is finalized when the next
parameter type token arrives.

The reduction is a plain fold::

    state = ReduceState()
    for capture in captures:
        state = step(state, capture)
    functions = finish(state)

which :func:`reduce_captures` wraps.  Nothing here imports tree-sitter, so
the fold can be driven with synthetic :class:`Capture` sequences.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

POINTER = "*"


class CaptureKind(enum.Enum):
    """Category of a named capture from the declaration query."""

    DECLARATION = "function.declaration"
    RETURN_TYPE = "function.type"
    RETURN_TYPE_OTHER = "function.type.other"
    RETURN_POINTER = "function.pointer"
    FUNCTION_NAME = "function.name"
    PARAM_TYPE = "param.type"
    PARAM_NAME = "param.name"

    @classmethod
    def from_name(cls, name: str) -> CaptureKind | None:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class ParamRecord:
    """One parameter of a C prototype, in declaration order."""

    type: str = ""
    name: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "name": self.name}


@dataclass
class FunctionRecord:
    """A C function prototype reconstructed from the capture stream."""

    name: str = ""
    return_type: str = ""
    comment: str = ""
    params: list[ParamRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "return_type": self.return_type,
            "comment": self.comment,
            "params": [p.to_dict() for p in self.params],
        }


@dataclass
class Capture:
    """A single (name, text, node) event from the query engine.

    ``node`` is only consulted on declaration boundaries, to pick up a
    trailing comment through ``node.next_sibling``.  It may be ``None``.
    """

    name: str
    text: str
    node: Any = None

    @property
    def kind(self) -> CaptureKind | None:
        return CaptureKind.from_name(self.name)


@dataclass
class ReduceState:
    """Accumulator threaded through :func:`step`."""

    functions: list[FunctionRecord] = field(default_factory=list)
    return_tokens: list[str] = field(default_factory=list)
    current: FunctionRecord | None = None
    param: ParamRecord | None = None
    previous: CaptureKind | None = None


def collapse_tokens(tokens: Iterable[str]) -> str:
    """Join return-type tokens, dropping immediate repeats.

    The same node can be reported under two capture names (an ``ERROR``
    node matches both the wildcard and the fallback pattern), which shows up
    as an adjacent duplicate.
    """
    collapsed: list[str] = []
    for tok in tokens:
        if collapsed and collapsed[-1] == tok:
            continue
        collapsed.append(tok)
    return " ".join(collapsed).lstrip(" ")


def node_text(node: Any) -> str:
    """Decode the source text of a tree-sitter node (or a stand-in)."""
    text = getattr(node, "text", None)
    if text is None:
        return ""
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return str(text)


def trailing_comment(node: Any) -> str:
    """Return the text of a comment that directly follows *node*, if any."""
    if node is None:
        return ""
    sibling = getattr(node, "next_sibling", None)
    if sibling is None:
        return ""
    grammar = getattr(sibling, "grammar_name", None) or getattr(sibling, "type", None)
    if grammar != "comment":
        return ""
    return node_text(sibling)


def normalize_param_name(param: ParamRecord) -> None:
    """Move pointer markup from the declarator text onto the type."""
    if POINTER not in param.name:
        return
    param.type = f"{param.type} {POINTER}"
    param.name = param.name.replace(POINTER, "").strip()


def _flush_param(state: ReduceState) -> None:
    param = state.param
    state.param = None
    if param is None or not param.name:
        return
    if state.current is None:
        state.current = FunctionRecord()
    state.current.params.append(param)


def _finalize(state: ReduceState) -> None:
    """Close the open function record and emit it if it has a name."""
    _flush_param(state)
    func = state.current
    state.current = None
    if func is None:
        return
    func.return_type = collapse_tokens(state.return_tokens)
    if func.name:
        state.functions.append(func)


def _open_function(state: ReduceState) -> FunctionRecord:
    if state.current is None:
        state.current = FunctionRecord()
    return state.current


def is_repeated_boundary(previous: CaptureKind | None, kind: CaptureKind) -> bool:
    """True when a boundary capture directly follows another boundary.

    The declaration pattern can fire for both the outer wrapper and an inner
    declarator alternative; only the first firing closes the previous record.
    """
    return kind is CaptureKind.DECLARATION and previous is CaptureKind.DECLARATION


def step(state: ReduceState, capture: Capture) -> ReduceState:
    """Advance the reduction by one capture."""
    kind = capture.kind
    if kind is None:
        return state

    if kind is CaptureKind.DECLARATION:
        if not is_repeated_boundary(state.previous, kind):
            _finalize(state)
        state.return_tokens = []
        state.param = None
        state.current = FunctionRecord(comment=trailing_comment(capture.node))

    elif kind in (CaptureKind.RETURN_TYPE, CaptureKind.RETURN_TYPE_OTHER):
        state.return_tokens.append(capture.text)

    elif kind is CaptureKind.RETURN_POINTER:
        state.return_tokens.append(POINTER)

    elif kind is CaptureKind.FUNCTION_NAME:
        _open_function(state).name = capture.text

    elif kind is CaptureKind.PARAM_TYPE:
        if state.param is not None and state.param.name:
            _flush_param(state)
        state.param = ParamRecord(type=capture.text)

    elif kind is CaptureKind.PARAM_NAME:
        if state.param is None:
            state.param = ParamRecord()
        state.param.name = capture.text
        normalize_param_name(state.param)

    state.previous = kind
    return state


def finish(state: ReduceState) -> list[FunctionRecord]:
    """Flush whatever is still open and return the finalized records."""
    _finalize(state)
    return state.functions


def reduce_captures(captures: Iterable[Capture]) -> list[FunctionRecord]:
    """Reduce an ordered capture stream into function records."""
    state = ReduceState()
    for capture in captures:
        state = step(state, capture)
    return finish(state)
