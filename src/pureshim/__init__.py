"""pureshim — purego binding generator for C headers.

Extracts function prototypes from C header files with tree-sitter and
writes Go files that bind them at runtime through
``github.com/ebitengine/purego``, without cgo.
"""

__version__ = "0.1.0"
