"""
Compiler — Builds the immutable session tables.

Merges user overrides from EngineConfig in front of the built-in tables.
"""

from cdlatex.compiler.compiler import (
    merge_entries,
    count_symbol_levels,
    compile_tables,
)

__all__ = [
    "merge_entries",
    "count_symbol_levels",
    "compile_tables",
]
