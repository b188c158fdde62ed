"""
Observability — Logging and metrics for the engine.

Provides:
- Structured logging with a per-command ID
- Counters for dispatch outcomes and read-loop behavior
"""

from cdlatex.observability.logging import (
    set_command_id,
    get_command_id,
    get_command_name,
    configure_logging,
    get_logger,
    LogContext,
    JSONFormatter,
    ReadableFormatter,
)
from cdlatex.observability.metrics import (
    Counter,
    Histogram,
    MetricsRegistry,
    get_metrics,
    reset_metrics,
)

__all__ = [
    # Logging
    "set_command_id",
    "get_command_id",
    "get_command_name",
    "configure_logging",
    "get_logger",
    "LogContext",
    "JSONFormatter",
    "ReadableFormatter",
    # Metrics
    "Counter",
    "Histogram",
    "MetricsRegistry",
    "get_metrics",
    "reset_metrics",
]
