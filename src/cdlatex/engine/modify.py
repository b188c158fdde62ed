"""
Modify Engine — Accents and font changes through the modify prefix key.

The text to modify is found first (selection, counted words, or the unit
before point), then wrapped in one step. Where there is nothing to wrap,
an empty form is inserted with the cursor inside it.
"""

from dataclasses import dataclass
from enum import Enum

from cdlatex.buffer import Buffer
from cdlatex.config import EngineConfig
from cdlatex.engine.context import EditContext
from cdlatex.engine.help import render_modifier_help
from cdlatex.engine.reader import PrefixReader
from cdlatex.engine.templates import resolve_cursor
from cdlatex.errors import ModeRestrictionError
from cdlatex.observability.logging import get_logger
from cdlatex.observability.metrics import get_metrics
from cdlatex.tables import ModifierEntry
from cdlatex.vocabulary import EditMode, Marker

logger = get_logger("modify")

OPENERS = "([{"
CLOSERS = ")]}"
ITALIC_CORRECTION = "\\/"
DOTLESS = {"i": "\\imath", "j": "\\jmath"}


class ExtentKind(str, Enum):
    """What resolve_extent found to modify."""
    SELECTION = "selection"
    WORDS = "words"
    EMPTY = "empty"
    GROUP = "group"
    MACRO = "macro"
    WORD = "word"
    CHAR = "char"


@dataclass(frozen=True)
class Extent:
    start: int
    end: int
    kind: ExtentKind


def _words_back(text: str, pos: int, count: int) -> int:
    for _ in range(count):
        while pos > 0 and not text[pos - 1].isalnum():
            pos -= 1
        while pos > 0 and text[pos - 1].isalnum():
            pos -= 1
    return pos


def _group_start(text: str, end: int) -> int | None:
    """Offset of the bracket opening the group that closes just before end."""
    depth = 0
    index = end
    while index > 0:
        index -= 1
        ch = text[index]
        if ch in CLOSERS:
            depth += 1
        elif ch in OPENERS:
            depth -= 1
            if depth == 0:
                return index
    return None


def resolve_extent(buffer: Buffer, config: EngineConfig, count: int | None = None) -> Extent:
    """
    Decide which text before point a modifier applies to.

    By priority: the active selection; count words; nothing (an empty
    form) at line start, after whitespace, a dollar or an opening bracket,
    or when backwards modification is off; otherwise the unit before
    point, which is a balanced bracket group, a macro name, an
    alphanumeric run, or a single character.
    """
    region = buffer.region()
    if region is not None and region[0] != region[1]:
        return Extent(region[0], region[1], ExtentKind.SELECTION)

    text = buffer.text
    pos = buffer.point
    if count:
        return Extent(_words_back(text, pos, count), pos, ExtentKind.WORDS)

    prev = buffer.char_before()
    if (
        buffer.at_line_start()
        or not config.modify_backwards
        or prev.isspace()
        or prev == "$"
        or prev in OPENERS
    ):
        return Extent(pos, pos, ExtentKind.EMPTY)

    if prev in CLOSERS:
        start = _group_start(text, pos)
        if start is not None:
            return Extent(start, pos, ExtentKind.GROUP)
        return Extent(pos - 1, pos, ExtentKind.CHAR)

    if prev.isalnum():
        start = pos
        while start > 0 and text[start - 1].isalnum():
            start -= 1
        if start > 0 and text[start - 1] == "\\":
            return Extent(start - 1, pos, ExtentKind.MACRO)
        return Extent(start, pos, ExtentKind.WORD)

    return Extent(pos - 1, pos, ExtentKind.CHAR)


def wrap(entry: ModifierEntry, macro: str, unit: str, mode: EditMode) -> str:
    """
    Apply a modifier macro to unit.

    A brace group is reused: as the argument of a command-style macro,
    or as the group a declaration-style macro is put into.
    """
    correction = ITALIC_CORRECTION if entry.italic_correction and mode == EditMode.TEXT else ""
    if entry.remove_dot and mode == EditMode.MATH and unit in DOTLESS:
        unit = DOTLESS[unit]

    braced = unit.startswith("{") and unit.endswith("}")
    if entry.command_style:
        if braced and not correction:
            return macro + unit
        if braced:
            unit = unit[1:-1]
        return f"{macro}{{{unit}{correction}}}"

    if braced:
        unit = unit[1:-1]
    return f"{{{macro} {unit}{correction}}}"


class ModifyEngine:
    """
    Reads a modifier key and applies it.

    Usage:
        modify = ModifyEngine(ctx)
        modify.math_modify()
    """

    def __init__(self, ctx: EditContext):
        self.ctx = ctx

    def render_help(self, level: int) -> list[str]:
        return render_modifier_help(self.ctx.tables.modifiers, self.ctx.config.math_modify_prefix)

    def math_modify(self, count: int | None = None) -> str | None:
        """
        Run the read loop and apply the chosen modifier.

        Pressing the prefix key a second time inserts it literally.

        Returns:
            The inserted text, or None if nothing was modified
        """
        prefix = self.ctx.config.math_modify_prefix
        reader = PrefixReader(self.ctx, prefix, self.render_help)
        result = reader.read(cycle_levels=False)
        if result.prefix_repeated:
            self.ctx.buffer.insert(prefix)
            return None
        return self.apply(result.key, count)

    def apply(self, key: str, count: int | None = None) -> str | None:
        """
        Apply the modifier bound to key at point.

        Raises:
            ModeRestrictionError: The modifier has no macro in the current mode
        """
        buffer = self.ctx.buffer
        entry = self.ctx.tables.modifier(key)
        if entry is None:
            buffer.insert(self.ctx.config.math_modify_prefix + key)
            get_metrics().fallthroughs.inc()
            return None

        mode = self.ctx.mode()
        macro = entry.macro_for(mode)
        if not macro:
            raise ModeRestrictionError(key, mode.value)

        extent = resolve_extent(buffer, self.ctx.config, count)
        logger.debug("Modifier %r on %s extent [%d, %d)", key, extent.kind.value,
                     extent.start, extent.end)

        unit = Marker.CURSOR.value if extent.kind == ExtentKind.EMPTY else buffer.text[extent.start:extent.end]
        replacement = wrap(entry, macro, unit, mode)

        buffer.delete(extent.start, extent.end)
        buffer.goto(extent.start)
        buffer.insert(replacement)
        buffer.deactivate_selection()
        if extent.kind == ExtentKind.EMPTY:
            resolve_cursor(buffer, extent.start, buffer.point)

        get_metrics().expansions.inc()
        return replacement
