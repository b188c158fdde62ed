"""
Engine — Interactive expansion over a buffer.

- Engine: command boundary (one CommandResult per command)
- KeywordDispatcher: the trigger key
- TemplateInserter: environment templates and placeholders
- SymbolReader / ModifyEngine: the two prefix keys
- DelimiterInserter: brackets, dollars, sub/superscripts
"""

from cdlatex.engine.advance import (
    CharClass,
    AdvanceRule,
    AdvanceResult,
    ADVANCE_RULES,
    advance_point,
    scan_forward,
)
from cdlatex.engine.context import EditContext
from cdlatex.engine.state import ModeState
from cdlatex.engine.templates import TemplateInserter, resolve_cursor
from cdlatex.engine.dispatcher import (
    KeywordDispatcher,
    TabOutcome,
    TabResult,
    keyword_before,
)
from cdlatex.engine.reader import PrefixReader, ReadResult
from cdlatex.engine.symbols import SymbolReader
from cdlatex.engine.modify import (
    ExtentKind,
    Extent,
    ModifyEngine,
    resolve_extent,
    wrap,
)
from cdlatex.engine.delimiters import DelimiterInserter
from cdlatex.engine.engine import CommandResult, Engine

__all__ = [
    # Advance
    "CharClass",
    "AdvanceRule",
    "AdvanceResult",
    "ADVANCE_RULES",
    "advance_point",
    "scan_forward",
    # State
    "EditContext",
    "ModeState",
    # Components
    "TemplateInserter",
    "resolve_cursor",
    "KeywordDispatcher",
    "TabOutcome",
    "TabResult",
    "keyword_before",
    "PrefixReader",
    "ReadResult",
    "SymbolReader",
    "ExtentKind",
    "Extent",
    "ModifyEngine",
    "resolve_extent",
    "wrap",
    "DelimiterInserter",
    # Boundary
    "CommandResult",
    "Engine",
]
