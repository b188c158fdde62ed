"""Tests for metrics collection."""

from cdlatex.observability import (
    Counter,
    Histogram,
    get_metrics,
    reset_metrics,
)


class TestCounter:
    """Tests for Counter metric."""

    def test_starts_at_zero(self):
        counter = Counter("test", "Test counter")
        assert counter.value == 0

    def test_increment(self):
        counter = Counter("test", "Test counter")
        counter.inc()
        assert counter.value == 1

    def test_increment_by_amount(self):
        """Can increment by specific amount."""
        counter = Counter("test", "Test counter")
        counter.inc(5)
        assert counter.value == 5

    def test_reset(self):
        counter = Counter("test", "Test counter")
        counter.inc(10)
        counter.reset()
        assert counter.value == 0


class TestHistogram:
    """Tests for Histogram metric."""

    def test_observe_values(self):
        hist = Histogram("test", "Test histogram")
        hist.observe(1.0)
        hist.observe(2.0)
        hist.observe(3.0)

        assert hist.count == 3
        assert hist.avg == 2.0

    def test_min_max(self):
        """Tracks min and max."""
        hist = Histogram("test", "Test histogram")
        hist.observe(5.0)
        hist.observe(1.0)
        hist.observe(10.0)

        assert hist.min == 1.0
        assert hist.max == 10.0

    def test_empty(self):
        hist = Histogram("test")
        assert hist.to_dict() == {"count": 0, "avg": 0.0, "min": 0.0, "max": 0.0}


class TestMetricsRegistry:
    """Tests for global metrics registry."""

    def test_get_metrics_is_global(self):
        assert get_metrics() is get_metrics()

    def test_reset(self):
        metrics = get_metrics()
        metrics.expansions.inc()
        metrics.symbol_level.observe(2)
        reset_metrics()

        assert metrics.expansions.value == 0
        assert metrics.symbol_level.count == 0

    def test_to_dict(self):
        metrics = get_metrics()
        metrics.commands_total.inc()
        metrics.fallthroughs.inc(2)

        d = metrics.to_dict()
        assert d["commands"]["total"] == 1
        assert d["dispatch"]["fallthroughs"] == 2
        assert d["reader"]["symbol_level"]["count"] == 0

    def test_engine_counts_expansions_and_advances(self, make_engine):
        make_engine("$fr|$").tab()
        make_engine("zz| yy").tab()

        metrics = get_metrics()
        assert metrics.commands_total.value == 2
        assert metrics.expansions.value == 1
        assert metrics.advances.value == 1
