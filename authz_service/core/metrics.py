"""Prometheus metric inventory.

Every metric the service exports is declared here.  The HTTP metrics are
fed by MetricsMiddleware; the authorization metrics are incremented by
the routers and the resource gate, never by the dispatcher itself.

Scraped via GET /metrics (see authz_service/api/metrics_endpoint.py).
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # The authorization core does no I/O, so almost everything lands in
    # the lowest buckets; the upper ones catch a slow issuer or validator.
    buckets=[0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Authorization metrics
# ---------------------------------------------------------------------------

AUTHORIZATION_REQUESTS = Counter(
    "authorization_requests_total",
    "Authorization requests by response type and result",
    ["response_type", "result"],  # result: redirect | body | <error class name>
)

BEARER_GATE_DECISIONS = Counter(
    "bearer_gate_decisions_total",
    "Resource gate decisions on presented bearer credentials",
    ["result"],  # "admitted", "rejected" or "missing"
)
