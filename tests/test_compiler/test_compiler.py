"""Tests for the table compiler."""

import pytest

from cdlatex.compiler import compile_tables, count_symbol_levels, merge_entries
from cdlatex.config import EngineConfig
from cdlatex.tables import (
    DEFAULT_COMMANDS,
    DEFAULT_ENVIRONMENTS,
    DEFAULT_MODIFIERS,
    DEFAULT_SYMBOLS,
    CommandEntry,
    EnvironmentEntry,
    MergedTables,
    SymbolEntry,
)


def by_first(entry: tuple[str, str]) -> str:
    return entry[0]


class TestMergeEntries:
    """Tests for order-stable deduplication."""

    def test_user_before_defaults(self):
        merged = merge_entries([("a", "user")], [("b", "x"), ("a", "default")], key=by_first)
        assert merged == (("a", "user"), ("b", "x"))

    def test_first_occurrence_kept(self):
        merged = merge_entries([], [("a", 1), ("b", 2), ("a", 3)], key=by_first)
        assert merged == (("a", 1), ("b", 2))

    def test_idempotent(self):
        """Deduplicating an already deduplicated list changes nothing."""
        once = merge_entries([("a", 1)], [("b", 2), ("a", 3), ("c", 4)], key=by_first)
        twice = merge_entries([], once, key=by_first)
        assert twice == once

    def test_keep_list_retains_duplicates(self):
        merged = merge_entries(
            [("a", 1)], [("a", 2), ("b", 3), ("b", 4)], key=by_first, keep=["a"]
        )
        assert merged == (("a", 1), ("a", 2), ("b", 3))

    def test_none_user_list(self):
        assert merge_entries(None, [("a", 1)], key=by_first) == (("a", 1),)


class TestCountSymbolLevels:
    def test_maximum_slot_count(self):
        symbols = [
            SymbolEntry(key="a", levels=("\\alpha",)),
            SymbolEntry(key="e", levels=("\\epsilon", "\\varepsilon", "\\exp")),
        ]
        assert count_symbol_levels(symbols) == 3

    def test_empty(self):
        assert count_symbol_levels([]) == 0


class TestCompileTables:
    """Tests for building the session tables."""

    def test_defaults_only(self):
        tables = compile_tables()
        assert isinstance(tables, MergedTables)
        assert len(tables.commands) == len(DEFAULT_COMMANDS)
        assert len(tables.environments) == len(DEFAULT_ENVIRONMENTS)
        assert len(tables.symbols) == len(DEFAULT_SYMBOLS)
        assert len(tables.modifiers) == len(DEFAULT_MODIFIERS)
        assert tables.symbol_levels == 3

    def test_user_override_wins(self):
        config = EngineConfig(commands=(
            CommandEntry(keyword="fr", replacement="\\dfrac{?}{}", math_mode=True),
        ))
        tables = compile_tables(config)
        assert tables.command("fr").replacement == "\\dfrac{?}{}"
        assert len(tables.commands) == len(DEFAULT_COMMANDS)

    def test_user_entry_added(self):
        config = EngineConfig(environments=(
            EnvironmentEntry(name="theorem", body="\\begin{theorem}\n?\n\\end{theorem}"),
        ))
        tables = compile_tables(config)
        assert tables.environments[0].name == "theorem"
        assert tables.environment("itemize") is not None

    def test_user_symbols_raise_level_count(self):
        config = EngineConfig(symbols=(
            SymbolEntry(key="q", levels=("\\theta", "", "", "\\Theta")),
        ))
        assert compile_tables(config).symbol_levels == 4

    def test_tables_are_immutable(self):
        tables = compile_tables()
        with pytest.raises(Exception):
            tables.symbol_levels = 9
