"""Tests for metrics module — MetricsCollector and ProxyMetrics."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from tx_viewer.metrics.collector import MetricsCollector, ProxyMetrics


class TestMetricsCollector:
    """Tests for the low-level MetricsCollector."""

    def test_creates_registry(self) -> None:
        c = MetricsCollector()
        assert c.registry is not None

    def test_custom_registry(self) -> None:
        reg = CollectorRegistry()
        c = MetricsCollector(registry=reg)
        assert c.registry is reg

    def test_histogram(self) -> None:
        reg = CollectorRegistry()
        c = MetricsCollector(registry=reg)
        h = c.histogram("test_hist", "A test histogram")
        h.observe(0.5)
        assert reg.get_sample_value("test_hist_sum") == 0.5

    def test_counter(self) -> None:
        reg = CollectorRegistry()
        c = MetricsCollector(registry=reg)
        ct = c.counter("test_counter", "A test counter")
        ct.inc()
        ct.inc(2)
        assert reg.get_sample_value("test_counter_total") == 3.0


class TestProxyMetrics:
    """Tests for the upstream lookup metrics."""

    def test_track_upstream_request(self) -> None:
        m = ProxyMetrics()
        with m.track_upstream_request():
            pass
        assert m.registry.get_sample_value("txviewer_upstream_request_histogram_count") == 1.0

    def test_track_observes_on_exception(self) -> None:
        m = ProxyMetrics()
        with pytest.raises(RuntimeError), m.track_upstream_request():
            raise RuntimeError("boom")
        assert m.registry.get_sample_value("txviewer_upstream_request_histogram_count") == 1.0

    def test_record_failure_by_reason(self) -> None:
        m = ProxyMetrics()
        m.record_failure("upstream-error")
        m.record_failure("upstream-error")
        m.record_failure("malformed-response")
        value = m.registry.get_sample_value
        assert value("txviewer_upstream_failures_total", {"reason": "upstream-error"}) == 2.0
        assert value("txviewer_upstream_failures_total", {"reason": "malformed-response"}) == 1.0

    def test_instances_do_not_share_registry(self) -> None:
        assert ProxyMetrics().registry is not ProxyMetrics().registry
