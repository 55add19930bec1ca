"""
Prometheus metrics middleware for the Zobot chatbot API.

Exposes /metrics endpoint with request counters, latency histograms,
and business metrics (intents, lead scores).
"""

import logging
import time

from fastapi import Request, Response
from prometheus_client import (
    Counter, Histogram, Gauge,
    generate_latest, CONTENT_TYPE_LATEST,
)
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Request metrics
REQUEST_COUNT = Counter(
    "zobot_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "zobot_http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)
ACTIVE_REQUESTS = Gauge(
    "zobot_http_active_requests",
    "Currently active HTTP requests",
)

# Business metrics
INTENT_COUNT = Counter(
    "zobot_intent_dispatch_total",
    "Intent dispatches",
    ["intent"],
)
LEAD_SCORE_HIST = Histogram(
    "zobot_lead_score",
    "Session lead score after each turn",
    buckets=[0, 10, 20, 30, 50, 75, 100, 150, 200],
)


def record_intent(intent: str):
    """Record an intent dispatch event."""
    INTENT_COUNT.labels(intent=intent).inc()


def record_lead_score(score: float):
    """Record a lead score."""
    LEAD_SCORE_HIST.observe(score)


def route_label(request: Request) -> str:
    """Route template (``/api/chat/{session_id}/history``) so session ids stay out of labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware that records HTTP request metrics."""

    async def dispatch(self, request: Request, call_next):
        ACTIVE_REQUESTS.inc()
        start = time.time()

        try:
            response = await call_next(request)
        finally:
            ACTIVE_REQUESTS.dec()

        duration = time.time() - start
        endpoint = route_label(request)

        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
        ).inc()
        REQUEST_LATENCY.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

        return response


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
