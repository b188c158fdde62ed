"""
Engine — The command boundary of cdlatex.

Every keystroke-level command runs through Engine: it gets a command id
for logging, a buffer snapshot to roll back to, and comes back as a
CommandResult instead of an exception.
"""

from dataclasses import dataclass
from typing import Any, Callable
from uuid import uuid4

from cdlatex.buffer import Buffer
from cdlatex.collaborators import (
    EnvironmentPrompter,
    HelpDisplay,
    KeyReader,
    LabelGenerator,
    MathModeDetector,
    NullHelpDisplay,
    PathPrompter,
    ScriptedKeyReader,
    SequentialLabelGenerator,
    TexMathDetector,
)
from cdlatex.config import EngineConfig
from cdlatex.engine.context import EditContext
from cdlatex.engine.delimiters import CLOSERS, SCRIPT_CHARS, DelimiterInserter
from cdlatex.engine.dispatcher import KeywordDispatcher, TabHook
from cdlatex.engine.modify import ModifyEngine
from cdlatex.engine.state import ModeState
from cdlatex.engine.symbols import SymbolReader
from cdlatex.engine.templates import TemplateInserter
from cdlatex.errors import CdlatexError, ReadCancelled
from cdlatex.observability.logging import LogContext, get_logger
from cdlatex.observability.metrics import get_metrics
from cdlatex.tables import MergedTables
from cdlatex.vocabulary import Key, TemplateVariant

logger = get_logger("engine")

TRIGGER_KEY = "\t"


@dataclass
class CommandResult:
    """
    Outcome of one engine command.

    A cancelled command is neither a success nor an error.
    """
    success: bool
    data: Any = None
    message: str | None = None
    aborted: bool = False

    @classmethod
    def ok(cls, data: Any = None) -> "CommandResult":
        """Create successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> "CommandResult":
        """Create failed result."""
        return cls(success=False, message=message)

    @classmethod
    def cancelled(cls) -> "CommandResult":
        """Create result for a command the user aborted."""
        return cls(success=False, aborted=True)


class Engine:
    """
    Interactive LaTeX expansion over one buffer.

    Usage:
        engine = Engine(buffer=Buffer.from_marked("$fr|$"))
        engine.tab()
        engine.buffer.render()  # "$\\frac{|}{}$"
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        buffer: Buffer | None = None,
        detector: MathModeDetector | None = None,
        keys: KeyReader | None = None,
        help: HelpDisplay | None = None,
        labels: LabelGenerator | None = None,
        paths: PathPrompter | None = None,
        environments: EnvironmentPrompter | None = None,
        on_message: Callable[[str], None] | None = None,
    ):
        self.state = ModeState(config)
        self.ctx = EditContext(
            buffer=buffer if buffer is not None else Buffer(),
            state=self.state,
            detector=detector or TexMathDetector(),
            keys=keys or ScriptedKeyReader(),
            help=help or NullHelpDisplay(),
            labels=labels if labels is not None else SequentialLabelGenerator(),
            paths=paths,
            environments=environments,
            on_message=on_message,
        )
        self.tab_hooks: list[TabHook] = []

        self.templates = TemplateInserter(self.ctx)
        self.delimiters = DelimiterInserter(self.ctx)
        self.dispatcher = KeywordDispatcher(
            self.ctx, self.templates, self.delimiters, hooks=self.tab_hooks
        )
        self.symbols = SymbolReader(self.ctx, self.delimiters)
        self.modifier = ModifyEngine(self.ctx)

    @property
    def buffer(self) -> Buffer:
        return self.ctx.buffer

    @property
    def config(self) -> EngineConfig:
        return self.state.config

    @property
    def tables(self) -> MergedTables:
        return self.state.tables

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def tab(self) -> CommandResult:
        """Expand the keyword before point, or move to the next point of interest."""
        return self._run("tab", self.dispatcher.tab)

    def environment(self, name: str | None = None, item: bool = False) -> CommandResult:
        variant = TemplateVariant.ITEM if item else TemplateVariant.BODY
        return self._run("environment", self.templates.insert_environment, name, variant)

    def item(self) -> CommandResult:
        return self._run("item", self.templates.insert_item)

    def math_symbol(self) -> CommandResult:
        return self._run("math_symbol", self.symbols.math_symbol)

    def direct_symbol(self, chord: str) -> CommandResult:
        return self._run("direct_symbol", self.symbols.direct_symbol, chord)

    def math_modify(self, count: int | None = None) -> CommandResult:
        return self._run("math_modify", self.modifier.math_modify, count)

    def pair(self, char: str) -> CommandResult:
        return self._run("pair", self.delimiters.pair, char)

    def lr_pair(self) -> CommandResult:
        return self._run("lr_pair", self.delimiters.lr_pair)

    def dollar(self, display: bool = False) -> CommandResult:
        return self._run("dollar", self.delimiters.dollar, display)

    def sub_superscript(self, char: str) -> CommandResult:
        return self._run("sub_superscript", self.delimiters.sub_superscript, char)

    def insert_filename(self, absolute: bool = False) -> CommandResult:
        return self._run("insert_filename", self.templates.insert_filename, absolute)

    def handle_key(self, key: str) -> CommandResult:
        """
        Route a typed key to its command.

        Keys without a command are inserted as typed.
        """
        config = self.config
        if key == Key.CANCEL.value:
            return CommandResult.cancelled()
        if key == TRIGGER_KEY:
            return self.tab()
        if key == config.math_symbol_prefix:
            return self.math_symbol()
        if key == config.math_modify_prefix:
            return self.math_modify()
        if key in SCRIPT_CHARS:
            return self.sub_superscript(key)
        if key == "$":
            return self.dollar()
        if key in CLOSERS:
            return self.pair(key)
        return self._run("self_insert", self.buffer.insert, key)

    def reset(self, config: EngineConfig | None = None) -> MergedTables:
        """Rebuild the session tables, optionally from a new configuration."""
        return self.state.reset(config)

    # -------------------------------------------------------------------------
    # Command boundary
    # -------------------------------------------------------------------------

    def _run(self, name: str, handler: Callable[..., Any], *args: Any) -> CommandResult:
        get_metrics().commands_total.inc()
        snapshot = self.buffer.snapshot()

        with LogContext(uuid4(), command=name):
            logger.debug("Running %s", name)
            try:
                data = handler(*args)
            except ReadCancelled:
                self.buffer.restore(snapshot)
                logger.debug("%s cancelled", name)
                return CommandResult.cancelled()
            except CdlatexError as e:
                self.buffer.restore(snapshot)
                get_metrics().errors.inc()
                logger.info("%s failed: %s", name, e)
                self.ctx.message(str(e))
                return CommandResult.fail(str(e))

        return CommandResult.ok(data)
