"""Tests for Prometheus metrics."""

from __future__ import annotations

from prometheus_client import REGISTRY

from s3_bucket_provider.metrics import (
    api_call_duration_seconds,
    api_call_total,
    bucket_operations_total,
    error_total,
    lifecycle_duration_seconds,
    lifecycle_total,
)


class TestMetricsExist:
    """Test that all expected metrics are defined."""

    def test_names(self):
        """Test metric names; counters drop their _total suffix in _name."""
        assert lifecycle_total._name == "s3_bucket_provider_lifecycle"
        assert lifecycle_duration_seconds._name == "s3_bucket_provider_lifecycle_duration_seconds"
        assert bucket_operations_total._name == "s3_bucket_provider_bucket_operations"
        assert api_call_total._name == "s3_bucket_provider_api_call"
        assert api_call_duration_seconds._name == "s3_bucket_provider_api_call_duration_seconds"
        assert error_total._name == "s3_bucket_provider_error"


class TestMetricsRecording:
    """Test that metrics record values under their labels."""

    def test_lifecycle_counter(self):
        """Test incrementing the lifecycle counter."""
        labels = {"operation": "create", "result": "success"}
        before = REGISTRY.get_sample_value("s3_bucket_provider_lifecycle_total", labels) or 0.0

        lifecycle_total.labels(**labels).inc()

        assert REGISTRY.get_sample_value("s3_bucket_provider_lifecycle_total", labels) == before + 1

    def test_error_counter(self):
        """Test incrementing the error counter."""
        labels = {"operation": "delete", "error_kind": "remote_call"}
        before = REGISTRY.get_sample_value("s3_bucket_provider_error_total", labels) or 0.0

        error_total.labels(**labels).inc()

        assert REGISTRY.get_sample_value("s3_bucket_provider_error_total", labels) == before + 1

    def test_duration_histogram(self):
        """Test observing the lifecycle duration histogram."""
        labels = {"operation": "read"}
        before = REGISTRY.get_sample_value("s3_bucket_provider_lifecycle_duration_seconds_count", labels) or 0.0

        lifecycle_duration_seconds.labels(**labels).observe(0.2)

        assert (
            REGISTRY.get_sample_value("s3_bucket_provider_lifecycle_duration_seconds_count", labels)
            == before + 1
        )
