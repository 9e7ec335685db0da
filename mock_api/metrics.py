"""
Prometheus metrics for the mock API.

The metric objects are process-wide and thread-safe; they live here rather
than on ``MockDataset`` so the served data stays read-only. Requests for
``/metrics`` itself and CORS preflights are not counted, so scraping does
not skew the numbers a load-balancer demo compares across backends.
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

# Paths and methods left out of request accounting.
METRICS_PATH = "/metrics"
UNTRACKED_METHODS = frozenset({"OPTIONS"})

REQUESTS_TOTAL = Counter(
    "mock_api_requests_total",
    "Total number of requests handled by the mock API",
    ["server", "language"],
)
REQUEST_LATENCY = Histogram(
    "mock_api_request_latency_seconds",
    "Request latency in seconds",
    ["server", "language"],
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)
UPTIME_SECONDS = Gauge(
    "mock_api_uptime_seconds",
    "Uptime of the mock API in seconds",
    ["server", "language"],
)


def should_track(method: str, path: str) -> bool:
    """Return True if a request counts towards the request metrics."""
    return method not in UNTRACKED_METHODS and path != METRICS_PATH


def record_request(server: str, language: str, elapsed_seconds: float) -> None:
    """Count one handled request and observe its latency."""
    REQUESTS_TOTAL.labels(server=server, language=language).inc()
    REQUEST_LATENCY.labels(server=server, language=language).observe(max(0.0, elapsed_seconds))


def render(server: str, language: str, uptime_seconds: float) -> tuple[bytes, str]:
    """
    Refresh the uptime gauge and render every metric.

    Returns:
        The exposition body and its content type.
    """
    UPTIME_SECONDS.labels(server=server, language=language).set(uptime_seconds)
    return generate_latest(), CONTENT_TYPE_LATEST
