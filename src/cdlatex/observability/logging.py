"""
Logging — Records tagged with the editing command that emitted them.

Every top-level command runs inside a LogContext carrying a fresh id and
the command name, so one keystroke's dispatch decisions can be grepped
out of a session log.
"""

import logging
import json
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


_command_id: ContextVar[str | None] = ContextVar("command_id", default=None)
_command_name: ContextVar[str | None] = ContextVar("command_name", default=None)


def set_command_id(cid: UUID | str | None) -> None:
    """Set command ID for current context."""
    _command_id.set(str(cid) if cid else None)


def get_command_id() -> str | None:
    """Get command ID from current context."""
    return _command_id.get()


def get_command_name() -> str | None:
    return _command_name.get()


class CommandFilter(logging.Filter):
    """Adds command_id and command to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.command_id = get_command_id() or "-"
        record.command = get_command_name() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        cid = getattr(record, "command_id", "-")
        command = getattr(record, "command", "-")
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "command_id": None if cid == "-" else cid,
            "command": None if command == "-" else command,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


class ReadableFormatter(logging.Formatter):
    """
    Human-readable formatter for the terminal.

    ``DEBUG   [1f0c2a9e tab] cdlatex.dispatcher: Expanded keyword 'fr'``
    """

    def format(self, record: logging.LogRecord) -> str:
        cid = getattr(record, "command_id", "-")
        command = getattr(record, "command", "-")
        scope = cid[:8] if cid != "-" else "-"
        if command != "-":
            scope = f"{scope} {command}"

        base = f"{record.levelname:<7} [{scope}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
    stream: Any = None,
) -> None:
    """
    Route the cdlatex loggers to one handler.

    Args:
        level: Logging level
        json_format: Emit JSON lines instead of readable text
        stream: Output stream (default: stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(CommandFilter())
    handler.setFormatter(JSONFormatter() if json_format else ReadableFormatter())

    root = logging.getLogger("cdlatex")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a cdlatex component."""
    return logging.getLogger(f"cdlatex.{name}")


class LogContext:
    """
    Binds a command id, and optionally the command name, to the records
    logged inside it.

    Usage:
        with LogContext(uuid4(), command="tab"):
            logger.debug("Expanding...")
    """

    def __init__(self, command_id: UUID | str | None, command: str | None = None):
        self.command_id = command_id
        self.command = command
        self._tokens = None

    def __enter__(self):
        self._tokens = (
            _command_id.set(str(self.command_id) if self.command_id else None),
            _command_name.set(self.command),
        )
        return self

    def __exit__(self, *args):
        if self._tokens is not None:
            id_token, name_token = self._tokens
            _command_name.reset(name_token)
            _command_id.reset(id_token)
