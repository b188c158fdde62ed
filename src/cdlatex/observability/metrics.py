"""
Metrics — Counters for what the engine did with each keystroke.

Useful to see which keywords expand and how often the read loops time out
into help.
"""

from dataclasses import dataclass, field
from threading import Lock
from typing import Any


class Counter:
    """Monotonically increasing counter."""
    
    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._value = 0.0
        self._lock = Lock()
    
    def inc(self, amount: float = 1.0) -> None:
        """Increment counter."""
        with self._lock:
            self._value += amount
    
    @property
    def value(self) -> float:
        return self._value
    
    def reset(self) -> None:
        """Reset counter (for testing)."""
        with self._lock:
            self._value = 0.0


class Histogram:
    """
    Simple histogram for tracking distributions.
    
    Tracks count, sum, min, max for calculating stats.
    """
    
    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._count = 0
        self._sum = 0.0
        self._min = float("inf")
        self._max = float("-inf")
        self._lock = Lock()
    
    def observe(self, value: float) -> None:
        """Record an observation."""
        with self._lock:
            self._count += 1
            self._sum += value
            self._min = min(self._min, value)
            self._max = max(self._max, value)
    
    @property
    def count(self) -> int:
        return self._count
    
    @property
    def avg(self) -> float:
        if self._count == 0:
            return 0.0
        return self._sum / self._count
    
    @property
    def min(self) -> float:
        return self._min if self._count > 0 else 0.0
    
    @property
    def max(self) -> float:
        return self._max if self._count > 0 else 0.0
    
    def reset(self) -> None:
        with self._lock:
            self._count = 0
            self._sum = 0.0
            self._min = float("inf")
            self._max = float("-inf")
    
    def to_dict(self) -> dict[str, float]:
        return {
            "count": self._count,
            "avg": self.avg,
            "min": self.min,
            "max": self.max,
        }


def _counter(name: str, description: str):
    return field(default_factory=lambda: Counter(name, description))


@dataclass
class MetricsRegistry:
    """
    Registry for all engine metrics.
    """
    commands_total: Counter = _counter("commands_total", "Top-level commands run")
    expansions: Counter = _counter("expansions", "Keywords and templates expanded")
    advances: Counter = _counter("advances", "Trigger presses ending in a cursor advance")
    fallthroughs: Counter = _counter("fallthroughs", "Undefined keys inserted literally")
    errors: Counter = _counter("errors", "User-facing command failures")
    cancels: Counter = _counter("cancels", "Read loops aborted with the cancel key")
    help_shown: Counter = _counter("help_shown", "Help displays opened")
    
    symbol_level: Histogram = field(
        default_factory=lambda: Histogram("symbol_level", "Level of inserted math symbols")
    )
    
    def to_dict(self) -> dict[str, Any]:
        """Export all metrics as dict."""
        return {
            "commands": {
                "total": self.commands_total.value,
                "errors": self.errors.value,
                "cancels": self.cancels.value,
            },
            "dispatch": {
                "expansions": self.expansions.value,
                "advances": self.advances.value,
                "fallthroughs": self.fallthroughs.value,
            },
            "reader": {
                "help_shown": self.help_shown.value,
                "symbol_level": self.symbol_level.to_dict(),
            },
        }
    
    def reset(self) -> None:
        """Reset all metrics (for testing)."""
        for counter in (
            self.commands_total,
            self.expansions,
            self.advances,
            self.fallthroughs,
            self.errors,
            self.cancels,
            self.help_shown,
        ):
            counter.reset()
        self.symbol_level.reset()


# Global metrics registry
_metrics = MetricsRegistry()


def get_metrics() -> MetricsRegistry:
    """Get global metrics registry."""
    return _metrics


def reset_metrics() -> None:
    """Reset all metrics (for testing)."""
    _metrics.reset()
