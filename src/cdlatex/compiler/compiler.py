"""
Table Compiler — Merges user overrides with the built-in tables.

User entries are placed in front of the defaults and the result is
deduplicated by key, so the first occurrence (the user's) wins.
"""

from typing import Callable, Iterable, Sequence, TypeVar

from cdlatex.config import EngineConfig
from cdlatex.observability.logging import get_logger
from cdlatex.tables.defaults import (
    DEFAULT_COMMANDS,
    DEFAULT_ENVIRONMENTS,
    DEFAULT_MODIFIERS,
    DEFAULT_SYMBOLS,
)
from cdlatex.tables.models import (
    CommandEntry,
    EnvironmentEntry,
    MergedTables,
    ModifierEntry,
    SymbolEntry,
)

logger = get_logger("tables")

T = TypeVar("T")


def merge_entries(
    user: Sequence[T] | None,
    defaults: Sequence[T],
    key: Callable[[T], str],
    keep: Iterable[str] = (),
) -> tuple[T, ...]:
    """
    Concatenate user entries before defaults and drop later duplicates.

    Args:
        user: Override entries (None or empty means defaults only)
        defaults: Built-in entries
        key: Extracts the deduplication key of an entry
        keep: Keys whose duplicates are all retained

    Returns:
        Order-stable tuple where each key appears once, except keep-listed keys
    """
    keep_keys = set(keep)
    seen: set[str] = set()
    merged: list[T] = []
    for entry in [*(user or ()), *defaults]:
        k = key(entry)
        if k in seen and k not in keep_keys:
            continue
        seen.add(k)
        merged.append(entry)
    return tuple(merged)


def count_symbol_levels(symbols: Iterable[SymbolEntry]) -> int:
    """Largest number of level slots in any symbol entry."""
    return max((len(entry.levels) for entry in symbols), default=0)


def compile_tables(config: EngineConfig | None = None) -> MergedTables:
    """
    Build the session tables from configuration overrides and defaults.

    Never fails: absent overrides yield the default tables.
    """
    config = config or EngineConfig()
    keep = config.keep_duplicates

    commands = merge_entries(
        config.commands, DEFAULT_COMMANDS, key=_command_key, keep=keep
    )
    environments = merge_entries(
        config.environments, DEFAULT_ENVIRONMENTS, key=_environment_key, keep=keep
    )
    symbols = merge_entries(
        config.symbols, DEFAULT_SYMBOLS, key=_entry_key, keep=keep
    )
    modifiers = merge_entries(
        config.modifiers, DEFAULT_MODIFIERS, key=_entry_key, keep=keep
    )

    tables = MergedTables(
        commands=commands,
        environments=environments,
        symbols=symbols,
        modifiers=modifiers,
        symbol_levels=count_symbol_levels(symbols),
    )
    logger.debug(
        "Compiled tables: %d commands, %d environments, %d symbols (%d levels), "
        "%d modifiers",
        len(commands), len(environments), len(symbols),
        tables.symbol_levels, len(modifiers),
    )
    return tables


def _command_key(entry: CommandEntry) -> str:
    return entry.keyword


def _environment_key(entry: EnvironmentEntry) -> str:
    return entry.name


def _entry_key(entry: SymbolEntry | ModifierEntry) -> str:
    return entry.key
