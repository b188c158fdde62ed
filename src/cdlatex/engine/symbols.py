"""
Prefix Symbol Reader — Math symbols through the symbol prefix key.

Pressing the prefix key once, twice or three times before a letter picks
the symbol on level 1, 2 or 3 of that letter.
"""

from cdlatex.engine.context import EditContext
from cdlatex.engine.delimiters import DelimiterInserter
from cdlatex.engine.help import render_symbol_help
from cdlatex.engine.reader import PrefixReader
from cdlatex.engine.templates import resolve_cursor
from cdlatex.errors import CdlatexError
from cdlatex.observability.logging import get_logger
from cdlatex.observability.metrics import get_metrics
from cdlatex.vocabulary import Key

logger = get_logger("symbols")


class SymbolReader:
    """
    Reads a symbol key and inserts its macro.

    Usage:
        symbols = SymbolReader(ctx, delimiters)
        symbols.math_symbol()
    """

    def __init__(self, ctx: EditContext, delimiters: DelimiterInserter):
        self.ctx = ctx
        self.delimiters = delimiters

    def render_help(self, level: int) -> list[str]:
        config = self.ctx.config
        return render_symbol_help(
            self.ctx.tables.symbols,
            level,
            config.math_symbol_prefix,
            config.binding_prefix(level),
        )

    def math_symbol(self) -> str | None:
        """
        Run the read loop and insert what the user picked.

        Returns:
            The inserted macro, or None if the key fell through
        """
        prefix = self.ctx.config.math_symbol_prefix
        reader = PrefixReader(self.ctx, prefix, self.render_help)
        result = reader.read(start_level=1, max_level=self.ctx.tables.symbol_levels)
        return self.insert_symbol(result.key, result.level)

    def insert_symbol(self, key: str, level: int) -> str | None:
        """
        Insert the macro of key on level.

        An undefined slot puts back what was typed: the prefix key level
        times, followed by key unless key is RET.
        """
        buffer = self.ctx.buffer
        entry = self.ctx.tables.symbol(key)
        macro = entry.at_level(level) if entry else None

        if macro is None:
            typed = self.ctx.config.math_symbol_prefix * level
            if key not in (Key.RETURN.value, Key.NEWLINE.value):
                typed += key
            buffer.insert(typed)
            get_metrics().fallthroughs.inc()
            logger.debug("No symbol for %r on level %d", key, level)
            return None

        if not self.ctx.detector.in_math_mode(buffer) or buffer.escaped():
            self.delimiters.dollar()

        start = buffer.point
        buffer.insert(macro)
        resolve_cursor(buffer, start, buffer.point)
        get_metrics().symbol_level.observe(level)
        get_metrics().expansions.inc()
        logger.debug("Inserted %s for %r on level %d", macro, key, level)
        return macro

    def direct_symbol(self, chord: str) -> str:
        """
        Insert the symbol bound to a chord such as ``A-a``.

        Raises:
            CdlatexError: The chord is not a direct binding of a defined symbol
        """
        config = self.ctx.config
        for level in range(1, len(config.symbol_direct_bindings) + 1):
            binding = config.binding_prefix(level)
            if not binding or not chord.startswith(binding):
                continue
            key = chord[len(binding):]
            if len(key) != 1:
                continue
            entry = self.ctx.tables.symbol(key)
            if entry is None or entry.at_level(level) is None:
                raise CdlatexError(f"No math symbol bound to {chord}")
            return self.insert_symbol(key, level)
        raise CdlatexError(f"{chord} is not a math symbol binding")
