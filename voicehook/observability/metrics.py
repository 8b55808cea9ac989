"""Prometheus metrics for voicehook.

Exposed at /metrics by the health router.
"""

from prometheus_client import Counter, Gauge, Histogram

WEBHOOK_REQUESTS = Counter(
    "voicehook_webhook_requests_total",
    "Inbound webhook calls by event type and outcome",
    labelnames=["event_type", "outcome"],
)

TURN_LATENCY = Histogram(
    "voicehook_turn_latency_seconds",
    "Time from event receipt to end-of-turn, by outcome",
    labelnames=["event_type", "outcome"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

STREAMED_FRAGMENTS = Counter(
    "voicehook_streamed_fragments_total",
    "Text fragments forwarded to the speak channel",
)

PROVIDER_ERRORS = Counter(
    "voicehook_provider_errors_total",
    "LLM provider failures during a turn",
    labelnames=["error_type"],
)

ACTIVE_SESSIONS = Gauge(
    "voicehook_active_sessions",
    "Number of sessions held by the session store",
)
