"""
Test that @measure_operation records in-process stats and Prometheus metrics
"""

import logging

import pytest

from schedulekit.core.config import settings
from schedulekit.monitoring.prometheus_metrics import REGISTRY, PrometheusMetrics
from schedulekit.services.base import BaseService


def sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class MeasuredService(BaseService):
    @BaseService.measure_operation("succeed")
    def succeed(self, value):
        return value * 2

    @BaseService.measure_operation("fail")
    def fail(self):
        raise ValueError("Test error")

    def contextual(self):
        with self.measure_operation_context("contextual"):
            return "done"


@pytest.fixture
def service():
    svc = MeasuredService()
    svc.reset_metrics()
    return svc


class TestMeasureOperation:
    """In-process metrics kept per service class"""

    def test_success_is_recorded(self, service):
        assert service.succeed(21) == 42

        metrics = service.get_metrics()["succeed"]
        assert metrics["count"] == 1
        assert metrics["success_rate"] == 1.0
        assert metrics["min_time"] <= metrics["avg_time"] <= metrics["max_time"]

    def test_failure_is_recorded_and_reraised(self, service):
        with pytest.raises(ValueError):
            service.fail()

        metrics = service.get_metrics()["fail"]
        assert metrics["failure_count"] == 1
        assert metrics["success_count"] == 0

    def test_context_manager_is_recorded(self, service):
        assert service.contextual() == "done"
        assert service.get_metrics()["contextual"]["count"] == 1

    def test_decorator_marks_function(self):
        assert MeasuredService.succeed._operation_name == "succeed"
        assert MeasuredService.succeed._is_measured is True

    def test_reset_clears_metrics(self, service):
        service.succeed(1)
        service.reset_metrics()
        assert service.get_metrics() == {}

    def test_slow_operation_logs_warning(self, service, monkeypatch, caplog):
        monkeypatch.setattr(settings, "slow_operation_threshold_s", 0.0)
        with caplog.at_level(logging.WARNING, logger="MeasuredService"):
            service.succeed(1)
        assert "Slow operation detected: succeed" in caplog.text


class TestPrometheusRecording:
    """Service operations exported on the private registry"""

    def test_success_counter(self, service):
        labels = {"service": "MeasuredService", "operation": "succeed", "status": "success"}
        before = sample("schedulekit_service_operations_total", labels)

        service.succeed(1)

        assert sample("schedulekit_service_operations_total", labels) - before == 1

    def test_error_counter_by_type(self, service):
        labels = {"service": "MeasuredService", "operation": "fail", "error_type": "ValueError"}
        before = sample("schedulekit_errors_total", labels)

        with pytest.raises(ValueError):
            service.fail()

        assert sample("schedulekit_errors_total", labels) - before == 1

    def test_duration_histogram(self, service):
        labels = {"service": "MeasuredService", "operation": "succeed"}
        before = sample("schedulekit_service_operation_duration_seconds_count", labels)

        service.succeed(1)

        assert sample("schedulekit_service_operation_duration_seconds_count", labels) - before == 1

    def test_disabled_metrics_skip_prometheus(self, service, metrics_disabled):
        labels = {"service": "MeasuredService", "operation": "succeed", "status": "success"}
        before = sample("schedulekit_service_operations_total", labels)

        service.succeed(1)

        assert sample("schedulekit_service_operations_total", labels) == before
        assert service.get_metrics()["succeed"]["count"] == 1

    def test_exposition_format(self, service):
        service.succeed(1)
        payload = PrometheusMetrics.get_metrics()

        assert b"schedulekit_service_operations_total" in payload
        assert PrometheusMetrics.get_content_type().startswith("text/plain")

    def test_slot_check_counter(self):
        before = sample("schedulekit_slot_checks_total", {"outcome": "rejected"})
        PrometheusMetrics.record_slot_check(False)
        assert sample("schedulekit_slot_checks_total", {"outcome": "rejected"}) - before == 1

    def test_zero_slots_not_recorded(self):
        before = sample("schedulekit_slots_generated_total", {"operation": "empty_listing"})
        PrometheusMetrics.record_slots_generated("empty_listing", 0)
        assert sample("schedulekit_slots_generated_total", {"operation": "empty_listing"}) == before
