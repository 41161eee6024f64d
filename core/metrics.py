"""
Prometheus metrics for the license ledger.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Gauge, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Ledger metrics
license_key_submissions_total = Counter(
    "license_key_submissions_total",
    "License key submissions accepted by the ledger",
    ["outcome"],
)

license_key_rejections_total = Counter(
    "license_key_rejections_total",
    "License key submissions rejected by server-side verification",
    ["reason"],
)

activation_years = Gauge(
    "activation_years",
    "Years of validity credited to a deployment",
    ["deployment_id"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
