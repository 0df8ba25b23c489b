"""Prometheus metrics for series requests, storage health and demo data generation"""

from prometheus_client import Counter, Histogram

# Series metrics
series_request_counter = Counter(
    "worth_series_requests_total",
    "Balance series requests served",
    ["kind"],  # accounts | account | account_balance | dashboard | portfolio_balance
)

series_points_histogram = Histogram(
    "worth_series_points",
    "Number of daily points in served series",
    buckets=[7, 30, 90, 180, 365, 730, 1825],
)

# Storage metrics
storage_failures_counter = Counter(
    "worth_storage_failures_total",
    "Failed snapshot storage reads",
)

# Demo mode
synthetic_history_counter = Counter(
    "worth_synthetic_histories_total",
    "Synthetic histories generated",
    ["category"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_series(kind: str, points: int) -> None:
    """Record one served series and its length"""
    series_request_counter.labels(kind=kind).inc()
    series_points_histogram.observe(points)
