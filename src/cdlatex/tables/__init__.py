"""
Tables — Commands, environments, math symbols and modifiers.

- models: immutable entry types and MergedTables
- defaults: the built-in tables
"""

from cdlatex.tables.models import (
    NoAction,
    BuiltinAction,
    ParameterizedAction,
    CommandAction,
    CommandEntry,
    EnvironmentEntry,
    SymbolEntry,
    ModifierEntry,
    MergedTables,
)
from cdlatex.tables.defaults import (
    DEFAULT_COMMANDS,
    DEFAULT_ENVIRONMENTS,
    DEFAULT_SYMBOLS,
    DEFAULT_MODIFIERS,
)

__all__ = [
    # Models
    "NoAction",
    "BuiltinAction",
    "ParameterizedAction",
    "CommandAction",
    "CommandEntry",
    "EnvironmentEntry",
    "SymbolEntry",
    "ModifierEntry",
    "MergedTables",
    # Defaults
    "DEFAULT_COMMANDS",
    "DEFAULT_ENVIRONMENTS",
    "DEFAULT_SYMBOLS",
    "DEFAULT_MODIFIERS",
]
