"""
Edit Context — Everything a command handler works with.

The buffer is the only thing handlers mutate; the rest is read-only
session state and collaborators.
"""

from dataclasses import dataclass, field
from typing import Callable

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
    TexMathDetector,
)
from cdlatex.config import EngineConfig
from cdlatex.engine.state import ModeState
from cdlatex.tables import MergedTables
from cdlatex.vocabulary import EditMode


@dataclass
class EditContext:
    """Shared state handed to every component."""
    buffer: Buffer
    state: ModeState
    detector: MathModeDetector = field(default_factory=TexMathDetector)
    keys: KeyReader = field(default_factory=ScriptedKeyReader)
    help: HelpDisplay = field(default_factory=NullHelpDisplay)
    labels: LabelGenerator | None = None
    paths: PathPrompter | None = None
    environments: EnvironmentPrompter | None = None
    on_message: Callable[[str], None] | None = None

    @property
    def config(self) -> EngineConfig:
        return self.state.config

    @property
    def tables(self) -> MergedTables:
        return self.state.tables

    def mode(self) -> EditMode:
        """Editing mode at point, as seen by the detector."""
        return EditMode.MATH if self.detector.in_math_mode(self.buffer) else EditMode.TEXT

    def message(self, text: str) -> None:
        if self.on_message:
            self.on_message(text)
