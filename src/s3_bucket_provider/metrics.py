"""Prometheus metrics for the S3 Bucket Provider."""

from prometheus_client import Counter, Histogram

# Lifecycle metrics
lifecycle_total = Counter(
    "s3_bucket_provider_lifecycle_total",
    "Total number of lifecycle operations",
    ["operation", "result"],
)

lifecycle_duration_seconds = Histogram(
    "s3_bucket_provider_lifecycle_duration_seconds",
    "Duration of lifecycle operations in seconds",
    ["operation"],
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# S3 operation metrics
bucket_operations_total = Counter(
    "s3_bucket_provider_bucket_operations_total",
    "Total number of S3 bucket operations",
    ["operation", "result"],
)

# API call metrics
api_call_total = Counter(
    "s3_bucket_provider_api_call_total",
    "Total number of API calls",
    ["api_type", "operation", "result"],
)

api_call_duration_seconds = Histogram(
    "s3_bucket_provider_api_call_duration_seconds",
    "Duration of API calls in seconds",
    ["api_type", "operation"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0],
)

# Error metrics
error_total = Counter(
    "s3_bucket_provider_error_total",
    "Total number of errors reported as diagnostics",
    ["operation", "error_kind"],
)
