"""Prometheus metrics for tier resolution, source health and simulation triggers"""

from prometheus_client import Counter, Histogram

# Resolution metrics
resolution_counter = Counter(
    "cashflow90_resolution_total",
    "Resolved queries by the tier that answered",
    ["operation", "provenance"],  # db | derived | synthetic
)

source_failure_counter = Counter(
    "cashflow90_source_failures_total",
    "Upstream fetches that raised and were treated as empty",
    ["operation", "tier"],
)

# Simulation runner metrics
simulation_latency_histogram = Histogram(
    "cashflow90_simulation_trigger_seconds",
    "Simulation webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

simulation_failure_counter = Counter(
    "cashflow90_simulation_failures_total",
    "Failed simulation trigger submissions",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_resolution(operation: str, provenance: str) -> None:
    """Count which tier served an operation"""
    resolution_counter.labels(operation=operation, provenance=provenance).inc()
