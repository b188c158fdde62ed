"""
cdlatex — Fast insertion of LaTeX environments, macros and math symbols.
"""

from cdlatex.buffer import Buffer
from cdlatex.config import EngineConfig, load_config
from cdlatex.engine import CommandResult, Engine

__version__ = "0.1.0"

__all__ = [
    "Buffer",
    "EngineConfig",
    "load_config",
    "CommandResult",
    "Engine",
    "__version__",
]
