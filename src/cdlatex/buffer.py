"""
Buffer — The document text, the cursor, and an optional selection.

The only shared mutable state of the engine. Positions are character
offsets; point and mark follow the text through insertions and deletions.
"""

import re
from dataclasses import dataclass


CURSOR_GLYPH = "|"

_ENV_RE = re.compile(r"\\(begin|end)\{([^}\n]*)\}")


@dataclass(frozen=True)
class BufferState:
    """Snapshot used to roll back an aborted command."""
    text: str
    point: int
    mark: int | None
    selection_active: bool


@dataclass
class Buffer:
    """
    Editable text with a cursor.

    The selection is the span between mark and point while
    selection_active is set.
    """
    text: str = ""
    point: int = 0
    mark: int | None = None
    selection_active: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.point <= len(self.text):
            raise ValueError(f"point {self.point} outside buffer of length {len(self.text)}")

    # -------------------------------------------------------------------------
    # Construction and display
    # -------------------------------------------------------------------------

    @classmethod
    def from_marked(cls, marked: str, glyph: str = CURSOR_GLYPH) -> "Buffer":
        """
        Build a buffer from text where ``glyph`` marks the cursor.

        Without a glyph the cursor goes to the end.
        """
        index = marked.find(glyph)
        if index < 0:
            return cls(text=marked, point=len(marked))
        return cls(text=marked[:index] + marked[index + len(glyph):], point=index)

    def render(self, glyph: str = CURSOR_GLYPH) -> str:
        """Text with the cursor shown as ``glyph``."""
        return self.text[:self.point] + glyph + self.text[self.point:]

    def __len__(self) -> int:
        return len(self.text)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def char_before(self, pos: int | None = None) -> str:
        """Character before pos (default: point), or "" at the start."""
        pos = self.point if pos is None else pos
        return self.text[pos - 1] if pos > 0 else ""

    def char_after(self, pos: int | None = None) -> str:
        """Character at pos (default: point), or "" at the end."""
        pos = self.point if pos is None else pos
        return self.text[pos] if pos < len(self.text) else ""

    def line_start(self, pos: int | None = None) -> int:
        pos = self.point if pos is None else pos
        return self.text.rfind("\n", 0, pos) + 1

    def line_end(self, pos: int | None = None) -> int:
        pos = self.point if pos is None else pos
        end = self.text.find("\n", pos)
        return len(self.text) if end < 0 else end

    def at_line_start(self, pos: int | None = None) -> bool:
        pos = self.point if pos is None else pos
        return pos == self.line_start(pos)

    def backslashes_before(self, pos: int | None = None) -> int:
        """Number of consecutive backslashes immediately before pos."""
        pos = self.point if pos is None else pos
        count = 0
        while pos - count > 0 and self.text[pos - count - 1] == "\\":
            count += 1
        return count

    def escaped(self, pos: int | None = None) -> bool:
        """Whether a character typed at pos would be escaped by a backslash."""
        return self.backslashes_before(pos) % 2 == 1

    def region(self) -> tuple[int, int] | None:
        """The active selection as (start, end), or None."""
        if not self.selection_active or self.mark is None:
            return None
        return min(self.mark, self.point), max(self.mark, self.point)

    def enclosing_environment(self, pos: int | None = None) -> tuple[str, int] | None:
        """
        Innermost ``\\begin{...}`` still open at pos.

        Returns:
            (environment name, offset of its \\begin) or None
        """
        pos = self.point if pos is None else pos
        stack: list[tuple[str, int]] = []
        for match in _ENV_RE.finditer(self.text, 0, pos):
            kind, name = match.group(1), match.group(2)
            if kind == "begin":
                stack.append((name, match.start()))
            elif stack and stack[-1][0] == name:
                stack.pop()
        return stack[-1] if stack else None

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def insert(self, s: str) -> None:
        """Insert at point, leaving point after the inserted text."""
        self.insert_at(self.point, s)

    def insert_at(self, pos: int, s: str) -> None:
        """
        Insert at pos. Point moves with the text when it is at or after pos;
        mark only when strictly after.
        """
        if not s:
            return
        self.text = self.text[:pos] + s + self.text[pos:]
        if self.point >= pos:
            self.point += len(s)
        if self.mark is not None and self.mark > pos:
            self.mark += len(s)

    def delete(self, start: int, end: int) -> str:
        """Delete [start, end) and return the removed text."""
        start, end = min(start, end), max(start, end)
        removed = self.text[start:end]
        if not removed:
            return removed
        self.text = self.text[:start] + self.text[end:]
        self.point = _shift_for_delete(self.point, start, end)
        if self.mark is not None:
            self.mark = _shift_for_delete(self.mark, start, end)
        return removed

    def goto(self, pos: int) -> None:
        self.point = max(0, min(pos, len(self.text)))

    def deactivate_selection(self) -> None:
        self.selection_active = False

    # -------------------------------------------------------------------------
    # Rollback
    # -------------------------------------------------------------------------

    def snapshot(self) -> BufferState:
        return BufferState(self.text, self.point, self.mark, self.selection_active)

    def restore(self, state: BufferState) -> None:
        self.text = state.text
        self.point = state.point
        self.mark = state.mark
        self.selection_active = state.selection_active


def _shift_for_delete(pos: int, start: int, end: int) -> int:
    if pos <= start:
        return pos
    if pos >= end:
        return pos - (end - start)
    return start
