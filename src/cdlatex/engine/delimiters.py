"""
Delimiter Pair Inserter — Self-closing brackets, dollars and scripts.
"""

from cdlatex.engine.context import EditContext
from cdlatex.engine.templates import resolve_cursor
from cdlatex.errors import CdlatexError, MathDelimiterError
from cdlatex.observability.logging import get_logger

logger = get_logger("delimiters")

CLOSERS = {
    "(": ")",
    "[": "]",
    "{": "}",
    "<": ">",
    "|": "|",
    "$": "$",
}

# Delimiter typed before lr_pair -> (\left part, \right part)
LR_DELIMITERS = {
    "(": ("(", ")"),
    "[": ("[", "]"),
    "{": ("\\{", "\\}"),
    "<": ("\\langle", "\\rangle"),
    "|": ("|", "|"),
}

SCRIPT_CHARS = ("_", "^")


class DelimiterInserter:
    """
    Inserts paired delimiters at point.

    Usage:
        delimiters = DelimiterInserter(ctx)
        delimiters.pair("[")
    """

    def __init__(self, ctx: EditContext):
        self.ctx = ctx

    def pair(self, char: str) -> bool:
        """
        Insert char and its closer with point between them.

        Only delimiters listed in paired_parens pair up, and only when not
        escaped by a backslash; anything else is inserted as typed.

        Returns:
            True if a pair was inserted
        """
        if char == "$":
            return self.dollar()
        buffer = self.ctx.buffer
        closer = CLOSERS.get(char)
        if closer is None or char not in self.ctx.config.paired_parens or buffer.escaped():
            buffer.insert(char)
            return False
        buffer.insert(char + closer)
        buffer.goto(buffer.point - len(closer))
        return True

    def lr_pair(self) -> str:
        """
        Turn the delimiter before point into a ``\\left ... \\right`` pair.

        A closer that pair() inserted right after point is removed too.

        Returns:
            The delimiter that was converted
        """
        buffer = self.ctx.buffer
        char = buffer.char_before()
        if char not in LR_DELIMITERS:
            raise CdlatexError("lr_pair: no delimiter before point")

        start = buffer.point - 1
        if char == "{" and buffer.escaped(start):
            # \{ typed literally
            start -= 1
        closer = CLOSERS.get(char)
        if closer and char in self.ctx.config.paired_parens and buffer.char_after() == closer:
            buffer.delete(buffer.point, buffer.point + 1)
        buffer.delete(start, buffer.point)

        left, right = LR_DELIMITERS[char]
        template = f"\\left{left} ? \\right{right}"
        begin = buffer.point
        buffer.insert(template)
        resolve_cursor(buffer, begin, buffer.point)
        logger.debug("Inserted \\left%s pair", left)
        return char

    def dollar(self, display: bool = False) -> bool:
        """
        Open or close inline math.

        Inside dollar math the opening dollars are repeated to close it;
        inside any other kind of math this is an error.

        Returns:
            True if a pair was inserted

        Raises:
            MathDelimiterError: Point is in math not opened by dollars
        """
        buffer = self.ctx.buffer
        if buffer.escaped():
            buffer.insert("$")
            return False

        info = self.ctx.detector.math_open_delimiter_info(buffer)
        if info is not None:
            opener = info[0]
            if not opener.startswith("$"):
                raise MathDelimiterError("No dollars inside a math environment")
            buffer.insert(opener)
            return False

        if "$" not in self.ctx.config.paired_parens:
            buffer.insert("\\[" if display else "$")
            return False

        if display:
            opening, closing = "\\[ ", " \\]"
        else:
            opening, closing = "$", "$"
        buffer.insert(opening + closing)
        buffer.goto(buffer.point - len(closing))
        return True

    def sub_superscript(self, char: str) -> None:
        """
        Insert ``_{}`` or ``^{}`` with point inside the braces.

        Switches into math first when point is in text. Typed again at
        the start of such a group it doubles the script character
        (``a_{`` becomes ``a__{``).
        """
        if char not in SCRIPT_CHARS:
            raise ValueError(f"Not a script character: {char!r}")
        buffer = self.ctx.buffer
        if buffer.escaped():
            buffer.insert(char)
            return

        if not self.ctx.detector.in_math_mode(buffer):
            self.dollar()

        if buffer.text[max(0, buffer.point - 2):buffer.point] == char + "{":
            buffer.insert_at(buffer.point - 1, char)
            return

        buffer.insert(char + "{}")
        buffer.goto(buffer.point - 1)
