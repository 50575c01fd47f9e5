"""Prometheus instrumentation for the scheduling services."""

from .prometheus_metrics import PrometheusMetrics, prometheus_metrics

__all__ = ["PrometheusMetrics", "prometheus_metrics"]
