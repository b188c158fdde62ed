"""
Shared fixtures.

Engines are built headless: scripted keys, recorded help, a fixed file
answer and messages collected in a list.
"""

import pytest

from cdlatex.buffer import Buffer
from cdlatex.collaborators import (
    FixedPathPrompter,
    RecordingHelpDisplay,
    ScriptedKeyReader,
    StaticMathDetector,
)
from cdlatex.config import EngineConfig
from cdlatex.engine import Engine
from cdlatex.observability import reset_metrics


@pytest.fixture(autouse=True)
def fresh_metrics():
    """Every test starts from zeroed counters."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def messages() -> list[str]:
    return []


@pytest.fixture
def make_engine(messages):
    """
    Factory for engines over a marked text.

    Usage:
        engine = make_engine("$fr|$")
        engine = make_engine("a|", keys=["`", "a"], math=True)
    """
    def factory(
        marked: str = "|",
        keys: list[str | None] | None = None,
        math: bool | None = None,
        config: EngineConfig | None = None,
        path: str | None = None,
        **kwargs,
    ) -> Engine:
        return Engine(
            config=config,
            buffer=Buffer.from_marked(marked),
            detector=StaticMathDetector(math=math) if math is not None else None,
            keys=ScriptedKeyReader(keys or []),
            help=RecordingHelpDisplay(),
            paths=FixedPathPrompter(path) if path is not None else None,
            on_message=messages.append,
            **kwargs,
        )

    return factory
