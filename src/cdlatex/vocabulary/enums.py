"""
Vocabulary enums — the shared language of the cdlatex engine.

Editing modes, builtin command operations, template placeholders and the
handful of special keys recognized inside the interactive read loops.
"""

from enum import Enum


# =============================================================================
# EDITING CONTEXT
# =============================================================================

class EditMode(str, Enum):
    """
    Editing context at the cursor, as reported by the math-mode detector.
    
    Selects between the math and text variants of commands and modifiers.
    """
    MATH = "math"
    TEXT = "text"


class TemplateVariant(str, Enum):
    """Which template of an environment entry to expand."""
    BODY = "body"
    ITEM = "item"


# =============================================================================
# COMMAND ACTIONS
# =============================================================================

class Builtin(str, Enum):
    """
    Builtin operations a command keyword may trigger after its
    replacement text has been inserted.
    """
    POSITION_CURSOR = "position_cursor"  # Resolve the ? marker in the replacement
    ENVIRONMENT = "environment"          # Expand an environment template (args: name)
    ITEM = "item"                        # Insert an item for the enclosing environment
    LR_PAIR = "lr_pair"                  # Turn the preceding delimiter into \left...\right
    LABEL = "label"                      # Insert a generated \label
    INSERT_FILENAME = "insert_filename"  # Prompt for a path and insert it


class ActionKind(str, Enum):
    """Tag of the command action variant."""
    NONE = "none"
    BUILTIN = "builtin"
    PARAMETERIZED = "parameterized"


class TableKind(str, Enum):
    """The four configuration tables."""
    COMMANDS = "commands"
    ENVIRONMENTS = "environments"
    SYMBOLS = "symbols"
    MODIFIERS = "modifiers"


# =============================================================================
# TEMPLATE PLACEHOLDERS
# =============================================================================

class Marker(str, Enum):
    """
    Placeholder markers embedded in template strings.
    
    CONTINUATION is only meaningful at the very start of a template.
    """
    CURSOR = "?"
    AUTOLABEL = "AUTOLABEL"
    AUTOFILE = "AUTOFILE"
    AUTOINDENT = "AUTOINDENT"
    CONTINUATION = "\\\\"


# Replacement for AUTOINDENT
INDENT_LITERAL = "  "


# =============================================================================
# KEYS
# =============================================================================

class Key(str, Enum):
    """Keys with a fixed meaning inside the prefix read loops."""
    CANCEL = "\x07"   # C-g
    HELP = "?"
    RETURN = "\r"
    NEWLINE = "\n"
