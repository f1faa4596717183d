"""Prometheus metrics for engine usage, clamped safe-to-spend and data source health"""

from prometheus_client import Counter, Histogram

# Engine metrics
dashboard_counter = Counter(
    "sphere_dashboard_computations_total",
    "Dashboard computations",
    ["source"],  # request | data_source
)

calculation_counter = Counter(
    "sphere_calculations_total",
    "Single-calculator requests",
    ["calculator"],
)

safe_to_spend_clamped_counter = Counter(
    "sphere_safe_to_spend_clamped_total",
    "Safe-to-spend results floored at zero (user overcommitted)",
)

# Data source metrics
data_source_failures_counter = Counter(
    "sphere_data_source_failures_total",
    "Failed Sphere API fetches",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_dashboard(source: str, clamped: bool) -> None:
    """Record a dashboard computation and whether safe-to-spend hit the floor"""
    dashboard_counter.labels(source=source).inc()
    if clamped:
        safe_to_spend_clamped_counter.inc()
