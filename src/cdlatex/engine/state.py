"""
Mode State — Compiled tables and settings of the active session.
"""

from cdlatex.compiler import compile_tables
from cdlatex.config import EngineConfig
from cdlatex.observability.logging import get_logger
from cdlatex.tables import MergedTables

logger = get_logger("state")


class ModeState:
    """
    Holds the MergedTables for a session.

    The tables are replaced wholesale by reset(), never edited in place.
    """

    def __init__(self, config: EngineConfig | None = None):
        self._config = config or EngineConfig()
        self._tables = compile_tables(self._config)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def tables(self) -> MergedTables:
        return self._tables

    def reset(self, config: EngineConfig | None = None) -> MergedTables:
        """Rebuild the tables, optionally from a new configuration."""
        if config is not None:
            self._config = config
        self._tables = compile_tables(self._config)
        logger.info("Tables rebuilt")
        return self._tables
