"""
Table Models — Entries of the four configuration tables.

Commands, environments, math symbols and modifiers are plain immutable
records. MergedTables bundles the deduplicated tables for one session.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cdlatex.vocabulary import Builtin, EditMode


class _Entry(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# COMMAND ACTIONS
# =============================================================================

class NoAction(_Entry):
    """The replacement text is all the command does."""
    kind: Literal["none"] = "none"


class BuiltinAction(_Entry):
    """Run a builtin operation without arguments."""
    kind: Literal["builtin"] = "builtin"
    op: Builtin


class ParameterizedAction(_Entry):
    """Run a builtin operation with an argument list."""
    kind: Literal["parameterized"] = "parameterized"
    op: Builtin
    args: tuple[str, ...] = ()


CommandAction = Annotated[
    Union[NoAction, BuiltinAction, ParameterizedAction],
    Field(discriminator="kind"),
]


# =============================================================================
# TABLE ENTRIES
# =============================================================================

class CommandEntry(_Entry):
    """
    A keyword expanded by the trigger key.

    The replacement is inserted in place of the keyword, then the action runs.
    """
    keyword: str = Field(..., description="Typed keyword")
    docstring: str = Field("", description="Shown in help listings")
    replacement: str = Field("", description="Inserted text, may contain markers")
    action: CommandAction = Field(default_factory=NoAction)
    text_mode: bool = Field(True, description="Active outside math")
    math_mode: bool = Field(False, description="Active inside math")

    @field_validator("keyword")
    @classmethod
    def keyword_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("keyword cannot be empty")
        return v

    def active_in(self, mode: EditMode) -> bool:
        """Whether the keyword expands in the given editing mode."""
        return self.math_mode if mode == EditMode.MATH else self.text_mode


class EnvironmentEntry(_Entry):
    """
    Template for a LaTeX environment.

    The item template is what a new item (or table row) looks like inside
    an already open environment.
    """
    name: str
    body: str
    item: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("environment name cannot be empty")
        return v


class SymbolEntry(_Entry):
    """Math macros reachable through the symbol prefix key, one per level."""
    key: str
    levels: tuple[str, ...] = ()

    @field_validator("key")
    @classmethod
    def single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"symbol key must be a single character, got {v!r}")
        return v

    def at_level(self, level: int) -> str | None:
        """Macro on a 1-based level, None when the slot is empty or missing."""
        if level < 1 or level > len(self.levels):
            return None
        return self.levels[level - 1] or None


class ModifierEntry(_Entry):
    """
    Accent or font change applied through the modify prefix key.

    command_style modifiers wrap as ``cmd{arg}``, the others as
    ``{cmd arg}``.
    """
    key: str
    math: str | None = None
    text: str | None = None
    command_style: bool = True
    remove_dot: bool = False
    italic_correction: bool = False

    @field_validator("key")
    @classmethod
    def single_character(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"modifier key must be a single character, got {v!r}")
        return v

    def macro_for(self, mode: EditMode) -> str | None:
        """Macro for the editing mode, or None when restricted to the other one."""
        return self.math if mode == EditMode.MATH else self.text


# =============================================================================
# MERGED TABLES
# =============================================================================

class MergedTables(_Entry):
    """
    The compiled tables for one session.

    Each tuple keeps user entries ahead of defaults; lookups return the
    first entry for a key.
    """
    commands: tuple[CommandEntry, ...] = ()
    environments: tuple[EnvironmentEntry, ...] = ()
    symbols: tuple[SymbolEntry, ...] = ()
    modifiers: tuple[ModifierEntry, ...] = ()
    symbol_levels: int = 0

    def command(self, keyword: str) -> CommandEntry | None:
        for entry in self.commands:
            if entry.keyword == keyword:
                return entry
        return None

    def environment(self, name: str) -> EnvironmentEntry | None:
        for entry in self.environments:
            if entry.name == name:
                return entry
        return None

    def symbol(self, key: str) -> SymbolEntry | None:
        for entry in self.symbols:
            if entry.key == key:
                return entry
        return None

    def modifier(self, key: str) -> ModifierEntry | None:
        for entry in self.modifiers:
            if entry.key == key:
                return entry
        return None

    def find_environment(self, name: str) -> EnvironmentEntry | None:
        """
        Exact match first, then the single environment the name is a
        prefix of.
        """
        exact = self.environment(name)
        if exact is not None:
            return exact
        candidates = {e.name for e in self.environments if e.name.startswith(name)}
        if len(candidates) == 1:
            return self.environment(candidates.pop())
        return None

    def environment_names(self) -> list[str]:
        seen: dict[str, None] = {}
        for entry in self.environments:
            seen.setdefault(entry.name, None)
        return list(seen)
