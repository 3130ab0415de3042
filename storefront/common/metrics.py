"""Prometheus metric definitions for the checkout service."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


checkout_requests_total = Counter("checkout_requests_total", "Total checkout requests", ["service"])
checkout_outcomes_total = Counter(
    "checkout_outcomes_total",
    "Checkout invocations by terminal outcome",
    ["service", "outcome"],
)
checkout_latency_seconds = Histogram("checkout_latency_seconds", "Checkout latency seconds", ["service"])
notification_failures_total = Counter(
    "notification_failures_total",
    "Absorbed downstream notification failures",
    ["service", "sink"],
)
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
