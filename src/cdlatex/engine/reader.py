"""
Prefix Reader — The timed read loop behind the two prefix keys.

After a prefix key the user types the key of a symbol or modifier. While
they hesitate, a help table pops up after a short delay; the help key
pages through it, the prefix key moves to the next level, and the cancel
key aborts the whole command.
"""

from dataclasses import dataclass
from typing import Callable

from cdlatex.engine.context import EditContext
from cdlatex.errors import ReadCancelled
from cdlatex.observability.logging import get_logger
from cdlatex.observability.metrics import get_metrics
from cdlatex.vocabulary import Key

logger = get_logger("reader")

HelpRenderer = Callable[[int], list[str]]


@dataclass
class ReadResult:
    """
    What the loop ended with.

    prefix_repeated is set when the prefix key itself ended the loop
    (only for loops that do not cycle levels).
    """
    key: str
    level: int
    prefix_repeated: bool = False


class PrefixReader:
    """
    Reads the key following a prefix key.

    Usage:
        reader = PrefixReader(ctx, prefix="`", render=lambda level: [...])
        result = reader.read(max_level=3)
    """

    def __init__(
        self,
        ctx: EditContext,
        prefix: str,
        render: HelpRenderer,
        prompt: str | None = None,
    ):
        self.ctx = ctx
        self.prefix = prefix
        self.render = render
        self.prompt = prompt

    def read(
        self,
        start_level: int = 1,
        max_level: int = 1,
        cycle_levels: bool = True,
    ) -> ReadResult:
        """
        Run the loop until a key other than help or prefix arrives.

        Args:
            start_level: Level the loop starts on
            max_level: Highest level; the prefix key wraps back to 1 after it
            cycle_levels: When False the prefix key ends the loop instead

        Raises:
            ReadCancelled: The cancel key was pressed
        """
        level = max(1, start_level)
        max_level = max(1, max_level)
        offset = 0
        help_visible = False
        delay = self.ctx.config.auto_help_delay
        page = self.ctx.config.help_page_size

        if self.prompt:
            self.ctx.message(self.prompt)

        try:
            while True:
                if help_visible:
                    self.ctx.help.show(self.render(level), offset)

                key = self.ctx.keys.read_key(None if help_visible else delay)

                if key is None:
                    # Idle past the delay
                    key = Key.HELP.value

                if key == Key.CANCEL.value:
                    get_metrics().cancels.inc()
                    logger.debug("Prefix read cancelled at level %d", level)
                    raise ReadCancelled()

                if key == Key.HELP.value:
                    if not help_visible:
                        help_visible = True
                        get_metrics().help_shown.inc()
                    else:
                        offset += page
                        if offset >= len(self.render(level)):
                            offset = 0
                    continue

                if key == self.prefix:
                    if not cycle_levels:
                        return ReadResult(key, level, prefix_repeated=True)
                    level = 1 if level >= max_level else level + 1
                    offset = 0
                    continue

                logger.debug("Read %r at level %d", key, level)
                return ReadResult(key, level)
        finally:
            if help_visible:
                self.ctx.help.hide()
