"""
Cursor Advance — Finds the next place where more input belongs.

Pressing the trigger key without a keyword to expand moves the cursor
forward to a "point of interest": out of a brace group, past a closing
dollar, to the end of the line. The scan classifies characters and lets
an ordered table of stop rules decide at each candidate character.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class CharClass(str, Enum):
    """Character categories the scanner distinguishes."""
    OPEN = "open"
    CLOSE = "close"
    SPACE = "space"
    NEWLINE = "newline"
    DOLLAR = "dollar"
    OTHER = "other"


OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = ")]}"

# After a closing bracket the scan goes on only if one of these follows
CONTINUE_AFTER_CLOSE = "_^({["


def classify(ch: str) -> CharClass:
    if ch in OPEN_BRACKETS and ch:
        return CharClass.OPEN
    if ch in CLOSE_BRACKETS and ch:
        return CharClass.CLOSE
    if ch == " ":
        return CharClass.SPACE
    if ch == "\n":
        return CharClass.NEWLINE
    if ch == "$":
        return CharClass.DOLLAR
    return CharClass.OTHER


@dataclass(frozen=True)
class Outcome:
    """Where a rule leaves the cursor and whether the scan ends there."""
    stop: bool
    pos: int


@dataclass(frozen=True)
class AdvanceRule:
    """A stop rule, consulted when the scan reaches a char of its class."""
    name: str
    char_class: CharClass
    apply: Callable[[str, int], Outcome]


@dataclass(frozen=True)
class AdvanceResult:
    pos: int
    rule: str


def _at_line_start(text: str, pos: int) -> bool:
    return pos == 0 or text[pos - 1] == "\n"


# =============================================================================
# RULES
# =============================================================================
# Each rule is called with pos at the candidate character.

def close_bracket_rule(text: str, pos: int) -> Outcome:
    """
    Stop before a closer that directly follows a bracket or hyphen;
    otherwise pass it and stop unless a script or another group follows.
    """
    prev = text[pos - 1] if pos > 0 else ""
    if prev and (classify(prev) in (CharClass.OPEN, CharClass.CLOSE) or prev == "-"):
        return Outcome(True, pos)
    pos += 1
    if pos < len(text) and text[pos] in CONTINUE_AFTER_CLOSE:
        return Outcome(False, pos)
    return Outcome(True, pos)


def dollar_rule(text: str, pos: int) -> Outcome:
    """Skip a run of dollars and stop."""
    while pos < len(text) and text[pos] == "$":
        pos += 1
    return Outcome(True, pos)


def newline_rule(text: str, pos: int) -> Outcome:
    """
    Stop at the start of a blank line or at the end of a line, except
    after a ``\\\\`` line break.
    """
    if _at_line_start(text, pos):
        return Outcome(True, pos)
    if text[max(0, pos - 2):pos] == "\\\\":
        return Outcome(False, pos + 1)
    return Outcome(True, pos)


def space_rule(text: str, pos: int) -> Outcome:
    """Stop after the first space, or before it at the start of a line."""
    if _at_line_start(text, pos):
        return Outcome(True, pos)
    return Outcome(True, pos + 1)


ADVANCE_RULES: tuple[AdvanceRule, ...] = (
    AdvanceRule("close-bracket", CharClass.CLOSE, close_bracket_rule),
    AdvanceRule("dollar", CharClass.DOLLAR, dollar_rule),
    AdvanceRule("newline", CharClass.NEWLINE, newline_rule),
    AdvanceRule("space", CharClass.SPACE, space_rule),
)


def _rule_for(char_class: CharClass) -> AdvanceRule | None:
    for rule in ADVANCE_RULES:
        if rule.char_class == char_class:
            return rule
    return None


# =============================================================================
# SCANNING
# =============================================================================

def depart(text: str, pos: int) -> Outcome:
    """
    First move away from the cursor before scanning.

    A dollar run is skipped and ends the move; a space run is skipped,
    landing after a newline that ends it; anything else is stepped over.
    """
    if pos >= len(text):
        return Outcome(True, len(text))
    ch = text[pos]
    if ch == "$":
        return dollar_rule(text, pos)
    if ch == " ":
        while pos < len(text) and text[pos] == " ":
            pos += 1
        if pos >= len(text):
            return Outcome(True, pos)
        if text[pos] == "\n":
            pos += 1
        return Outcome(False, pos)
    return Outcome(False, pos + 1)


def scan_forward(text: str, pos: int) -> AdvanceResult:
    """
    Apply the stop rules from pos onwards.

    When no rule stops the scan, the cursor stays where the last rule
    (or the caller) left it.
    """
    resting = pos
    index = pos
    while index < len(text):
        rule = _rule_for(classify(text[index]))
        if rule is None:
            index += 1
            continue
        outcome = rule.apply(text, index)
        if outcome.stop:
            return AdvanceResult(outcome.pos, rule.name)
        resting = index = outcome.pos
    return AdvanceResult(resting, "none")


def advance_point(text: str, pos: int) -> AdvanceResult:
    """Where the trigger key moves the cursor when nothing expands."""
    outcome = depart(text, pos)
    if outcome.stop:
        return AdvanceResult(outcome.pos, "depart")
    return scan_forward(text, outcome.pos)
