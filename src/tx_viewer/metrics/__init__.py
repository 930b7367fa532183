"""Metrics — Prometheus metrics collection and exposure."""

from __future__ import annotations

from tx_viewer.metrics.collector import MetricsCollector, ProxyMetrics

__all__ = ["MetricsCollector", "ProxyMetrics"]
