"""
Errors — Failures reported to the user at the command boundary.

None of these escape Engine: they are turned into a failed CommandResult
and the buffer is left as it was before the command.
"""


class CdlatexError(Exception):
    """Base for user-facing, non-fatal command failures."""
    pass


class NoEnvironmentError(CdlatexError):
    """Raised when a command needs an enclosing environment and there is none."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"{command}: no open environment at point")


class NoItemTemplateError(CdlatexError):
    """Raised when the enclosing environment defines no item template."""

    def __init__(self, command: str, environment: str):
        self.command = command
        self.environment = environment
        super().__init__(f"{command}: no item defined for {environment} environment")


class ModeRestrictionError(CdlatexError):
    """Raised when a modifier has no macro for the current editing mode."""

    def __init__(self, key: str, mode: str):
        self.key = key
        self.mode = mode
        super().__init__(f"No such modifier `{key}' in {mode} mode")


class MathDelimiterError(CdlatexError):
    """Raised when a dollar pair is requested inside non-dollar math."""
    pass


class ConfigError(CdlatexError):
    """Raised when a configuration file cannot be read or validated."""
    pass


class ReadCancelled(Exception):
    """
    Raised by the prefix read loops on the cancel key.

    Not an error: the command is rolled back silently.
    """
    pass
