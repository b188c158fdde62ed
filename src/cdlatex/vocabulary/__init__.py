"""
Vocabulary — Enumerated types forming the shared language of the engine.
"""

from cdlatex.vocabulary.enums import (
    # Context
    EditMode,
    TemplateVariant,
    # Actions
    Builtin,
    ActionKind,
    TableKind,
    # Templates
    Marker,
    INDENT_LITERAL,
    # Keys
    Key,
)

__all__ = [
    "EditMode",
    "TemplateVariant",
    "Builtin",
    "ActionKind",
    "TableKind",
    "Marker",
    "INDENT_LITERAL",
    "Key",
]
