"""
Prometheus metrics for the license binding service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

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

# Activation metrics
activation_decisions_total = Counter(
    "activation_decisions_total",
    "Activation decisions by outcome",
    ["outcome"],
)

binding_store_duration_seconds = Histogram(
    "binding_store_duration_seconds",
    "Binding store call duration in seconds",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
)

# Audit metrics
audit_write_failures_total = Counter(
    "audit_write_failures_total",
    "Audit entries that could not be written",
    ["reason"],
)
