"""query.py – tree-sitter binding that turns C header bytes into captures.

Runs the declaration query below over a tree-sitter-c syntax tree and
flattens the per-name capture lists into a single stream ordered by source
position, which :func:`pureshim.reducer.reduce_captures` folds into
:class:`~pureshim.reducer.FunctionRecord` objects.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator

import tree_sitter_c
from tree_sitter import Language, Parser, Query, QueryCursor

from pureshim.reducer import Capture, FunctionRecord, node_text, reduce_captures

FUNCTION_QUERY = """
(declaration
  _* @function.type
  (ERROR)* @function.type.other
  declarator: [
    (function_declarator
      declarator: _ @function.name
      parameters: (parameter_list
        (parameter_declaration
          (_)* @param.type
          declarator: _ @param.name
        )
      )?
    ) @function
    (pointer_declarator
      declarator: (function_declarator
        declarator: _ @function.name
        parameters: (parameter_list
          (parameter_declaration
            (_)* @param.type
            declarator: _ @param.name
          )
        )?
      )
    ) @function.pointer
  ]) @function.declaration
"""


@functools.lru_cache(maxsize=None)
def c_language() -> Language:
    return Language(tree_sitter_c.language())


@functools.lru_cache(maxsize=None)
def function_query() -> Query:
    """Compile the declaration query; ``QueryError`` propagates."""
    return Query(c_language(), FUNCTION_QUERY)


def iter_captures(source: bytes) -> Iterator[Capture]:
    """Yield the query captures for *source* in source order.

    Outer nodes come before inner nodes that start at the same byte, so a
    declaration boundary always precedes its first type token.  A node
    reported under the same name by several matches is yielded once.
    """
    parser = Parser(c_language())
    tree = parser.parse(source)
    cursor = QueryCursor(function_query())

    seen: set[tuple[int, int, str]] = set()
    events = []
    for name, nodes in cursor.captures(tree.root_node).items():
        for node in nodes:
            key = (node.start_byte, node.end_byte, name)
            if key in seen:
                continue
            seen.add(key)
            events.append((node.start_byte, -node.end_byte, len(events), name, node))

    events.sort()
    for _start, _neg_end, _order, name, node in events:
        yield Capture(name=name, text=node_text(node), node=node)


def extract_functions(source: bytes) -> list[FunctionRecord]:
    """Parse C header *source* and return its function prototypes."""
    return reduce_captures(iter_captures(source))
