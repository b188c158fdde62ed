"""
Configuration — The settings surface of the engine.

Loaded once per session and immutable afterwards. Table overrides are
merged in front of the built-in tables by the table compiler.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cdlatex.errors import ConfigError
from cdlatex.tables.models import (
    CommandEntry,
    EnvironmentEntry,
    ModifierEntry,
    SymbolEntry,
)

CONFIG_ENV_VAR = "CDLATEX_CONFIG"

# Modifier names accepted in direct symbol bindings, with their chord prefix
MODIFIER_PREFIXES = {
    "alt": "A",
    "control": "C",
    "meta": "M",
    "shift": "S",
    "super": "s",
    "hyper": "H",
}


class EngineConfig(BaseModel):
    """
    Engine settings.

    Usage:
        config = EngineConfig(paired_parens="$[{(", auto_help_delay=0.5)
        engine = Engine(config=config)
    """
    model_config = ConfigDict(frozen=True)

    # Table overrides, placed ahead of the built-in entries
    commands: tuple[CommandEntry, ...] = ()
    environments: tuple[EnvironmentEntry, ...] = ()
    symbols: tuple[SymbolEntry, ...] = ()
    modifiers: tuple[ModifierEntry, ...] = ()
    keep_duplicates: tuple[str, ...] = Field(
        (), description="Keys exempt from deduplication"
    )

    paired_parens: str = Field("$[{", description="Opening delimiters that self-close")
    auto_help_delay: float = Field(1.5, description="Idle seconds before help pops up")
    simplify_sub_super_scripts: bool = True
    math_symbol_prefix: str = "`"
    math_modify_prefix: str = "'"
    symbol_direct_bindings: tuple[tuple[str, ...] | None, ...] = Field(
        (), description="Per level, the modifier set of a direct binding"
    )
    insert_auto_labels: bool = True
    modify_backwards: bool = True
    working_directory: Path | None = Field(
        None, description="Base for relative file names (default: cwd)"
    )
    help_page_size: int = Field(20, description="Lines scrolled per help request")

    @field_validator("auto_help_delay")
    @classmethod
    def delay_not_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("auto_help_delay cannot be negative")
        return v

    @field_validator("math_symbol_prefix", "math_modify_prefix")
    @classmethod
    def prefix_single_key(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"prefix key must be a single character, got {v!r}")
        return v

    @field_validator("symbol_direct_bindings")
    @classmethod
    def known_modifiers(
        cls, v: tuple[tuple[str, ...] | None, ...]
    ) -> tuple[tuple[str, ...] | None, ...]:
        for modifiers in v:
            for name in modifiers or ():
                if name not in MODIFIER_PREFIXES:
                    raise ValueError(f"unknown key modifier: {name}")
        return v

    @field_validator("help_page_size")
    @classmethod
    def page_size_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("help_page_size must be at least 1")
        return v

    @property
    def base_directory(self) -> Path:
        return self.working_directory or Path.cwd()

    def binding_prefix(self, level: int) -> str | None:
        """
        Chord prefix of the direct binding for a 1-based level, e.g. "A-"
        for ``("alt",)`` or "C-A-" for ``("control", "alt")``.
        """
        if level < 1 or level > len(self.symbol_direct_bindings):
            return None
        modifiers = self.symbol_direct_bindings[level - 1]
        if not modifiers:
            return None
        return "".join(f"{MODIFIER_PREFIXES[m]}-" for m in modifiers)


def load_config(path: Path | str | None = None) -> EngineConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: Config file; falls back to $CDLATEX_CONFIG, then defaults

    Raises:
        ConfigError: File missing, not JSON, or failing validation
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return EngineConfig()

    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file {path} is not valid JSON: {e}")

    try:
        return EngineConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}")
