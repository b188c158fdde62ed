"""
Keyword Dispatcher — What the trigger key does.

In order: external hooks, keyword expansion, sub/superscript
simplification, and finally the heuristic cursor advance.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

from cdlatex.engine.advance import CONTINUE_AFTER_CLOSE, advance_point, scan_forward
from cdlatex.engine.context import EditContext
from cdlatex.engine.templates import TemplateInserter, resolve_cursor
from cdlatex.observability.logging import get_logger
from cdlatex.observability.metrics import get_metrics
from cdlatex.tables import CommandEntry
from cdlatex.vocabulary import ActionKind, Builtin, Marker

if TYPE_CHECKING:
    from cdlatex.engine.delimiters import DelimiterInserter

logger = get_logger("dispatcher")

# Word characters of a keyword, optionally followed by one opening delimiter
_KEYWORD_RE = re.compile(r"[A-Za-z0-9*]+[(\[{<|]?\Z")
_SCRIPT_GROUP_RE = re.compile(r"[_^]\{[-+0-9a-zA-Z]\}")

TabHook = Callable[[EditContext], bool]

# Builtins that resolve the cursor marker themselves
_CURSOR_BUILTINS = (Builtin.POSITION_CURSOR, Builtin.INSERT_FILENAME)


def _places_cursor(entry: CommandEntry) -> bool:
    action = entry.action
    return action.kind != ActionKind.NONE and action.op in _CURSOR_BUILTINS


class TabOutcome(str, Enum):
    """How a trigger press was handled."""
    HOOK = "hook"
    EXPANDED = "expanded"
    SIMPLIFIED = "simplified"
    LEFT_GROUP = "left_group"
    ADVANCED = "advanced"


@dataclass
class TabResult:
    outcome: TabOutcome
    keyword: str | None = None
    rule: str | None = None


def keyword_before(text: str, pos: int) -> tuple[int, str] | None:
    """
    The keyword ending at pos.

    Returns:
        (start offset, keyword) or None when no word precedes pos
    """
    # Keywords are short; a bounded look-back keeps the match local
    window_start = max(0, pos - 64)
    window = text[window_start:pos]
    match = None
    for candidate in _KEYWORD_RE.finditer(window):
        match = candidate
    if match is None:
        return None
    return window_start + match.start(), match.group(0)


class KeywordDispatcher:
    """
    Runs the trigger-key pipeline against the buffer.

    Usage:
        dispatcher = KeywordDispatcher(ctx, inserter, delimiters)
        result = dispatcher.tab()
    """

    def __init__(
        self,
        ctx: EditContext,
        inserter: TemplateInserter,
        delimiters: "DelimiterInserter",
        hooks: list[TabHook] | None = None,
    ):
        self.ctx = ctx
        self.inserter = inserter
        self.delimiters = delimiters
        self.hooks: list[TabHook] = hooks if hooks is not None else []

    def tab(self) -> TabResult:
        for hook in self.hooks:
            if hook(self.ctx):
                logger.debug("Trigger handled by hook %r", hook)
                return TabResult(TabOutcome.HOOK)

        expanded = self.expand_keyword()
        if expanded is not None:
            return TabResult(TabOutcome.EXPANDED, keyword=expanded)

        left = self.leave_script_group()
        if left is not None:
            return left

        result = advance_point(self.ctx.buffer.text, self.ctx.buffer.point)
        self.ctx.buffer.goto(result.pos)
        get_metrics().advances.inc()
        logger.debug("Advanced to %d by rule %s", result.pos, result.rule)
        return TabResult(TabOutcome.ADVANCED, rule=result.rule)

    # -------------------------------------------------------------------------
    # Keyword expansion
    # -------------------------------------------------------------------------

    def expand_keyword(self) -> str | None:
        """
        Expand the keyword before point if it is active in the current mode.

        Returns:
            The expanded keyword, or None
        """
        buffer = self.ctx.buffer
        found = keyword_before(buffer.text, buffer.point)
        if found is None:
            return None
        start, keyword = found

        entry = self.ctx.tables.command(keyword)
        if entry is None:
            return None
        mode = self.ctx.mode()
        if not entry.active_in(mode):
            logger.debug("Keyword %r not active in %s mode", keyword, mode.value)
            return None

        buffer.delete(start, buffer.point)
        buffer.insert(entry.replacement)
        end = buffer.point
        if not _places_cursor(entry):
            # The action then runs from where the marker was
            if resolve_cursor(buffer, start, end):
                end -= len(Marker.CURSOR.value)
        self.run_action(entry, start, end)
        get_metrics().expansions.inc()
        logger.debug("Expanded keyword %r", keyword)
        return keyword

    def run_action(self, entry: CommandEntry, start: int, end: int) -> None:
        """
        Dispatch the action of an expanded command.

        [start, end) is the span of the replacement text just inserted.
        """
        action = entry.action
        if action.kind == ActionKind.NONE:
            return

        op = action.op
        args = action.args if action.kind == ActionKind.PARAMETERIZED else ()

        if op == Builtin.POSITION_CURSOR:
            resolve_cursor(self.ctx.buffer, start, end)
        elif op == Builtin.ENVIRONMENT:
            self.inserter.insert_environment(args[0] if args else None)
        elif op == Builtin.ITEM:
            self.inserter.insert_item()
        elif op == Builtin.LR_PAIR:
            self.delimiters.lr_pair()
        elif op == Builtin.LABEL:
            self.inserter.insert_label(args[0] if args else None)
        elif op == Builtin.INSERT_FILENAME:
            resolve_cursor(self.ctx.buffer, start, end)
            self.inserter.insert_filename(absolute=bool(args and args[0] == "absolute"))
        else:
            raise ValueError(f"Unhandled builtin: {op}")

    # -------------------------------------------------------------------------
    # Leaving sub/superscript groups
    # -------------------------------------------------------------------------

    def leave_script_group(self) -> TabResult | None:
        """
        Step out of the bracket group that point is just inside of.

        A one-character sub/superscript group is simplified on the way
        (``x^{2}`` becomes ``x^2``) when enabled.

        Returns:
            A result when the press is finished here, None to keep scanning
            (also when point is not before a closing bracket)
        """
        buffer = self.ctx.buffer
        pos = buffer.point
        if buffer.char_after() not in (")", "]", "}") or not buffer.char_after():
            return None

        outcome = TabOutcome.LEFT_GROUP
        group = buffer.text[max(0, pos - 3):pos + 1]
        if self.ctx.config.simplify_sub_super_scripts and _SCRIPT_GROUP_RE.fullmatch(group):
            buffer.delete(pos, pos + 1)
            buffer.delete(pos - 2, pos - 1)
            buffer.goto(pos - 1)
            outcome = TabOutcome.SIMPLIFIED
            logger.debug("Simplified %r", group)
        else:
            buffer.goto(pos + 1)

        if buffer.char_after() not in CONTINUE_AFTER_CLOSE or not buffer.char_after():
            return TabResult(outcome)

        result = scan_forward(buffer.text, buffer.point)
        buffer.goto(result.pos)
        get_metrics().advances.inc()
        return TabResult(TabOutcome.ADVANCED, rule=result.rule)
