"""Tests for Prometheus metrics."""

from prometheus_client import REGISTRY

from voicehook.observability.metrics import (
    ACTIVE_SESSIONS,
    PROVIDER_ERRORS,
    STREAMED_FRAGMENTS,
    TURN_LATENCY,
    WEBHOOK_REQUESTS,
)


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestWebhookRequests:
    """Tests for WEBHOOK_REQUESTS counter."""

    def test_counter_increment(self) -> None:
        labels = {"event_type": "message", "outcome": "accepted"}
        before = sample("voicehook_webhook_requests_total", labels)

        WEBHOOK_REQUESTS.labels(**labels).inc()

        assert sample("voicehook_webhook_requests_total", labels) == before + 1


class TestTurnLatency:
    """Tests for TURN_LATENCY histogram."""

    def test_histogram_observe(self) -> None:
        labels = {"event_type": "session.start", "outcome": "completed"}
        before = sample("voicehook_turn_latency_seconds_count", labels)

        TURN_LATENCY.labels(**labels).observe(0.25)

        assert sample("voicehook_turn_latency_seconds_count", labels) == before + 1


class TestStreamingMetrics:
    """Tests for fragment and provider error counters."""

    def test_fragments_counted(self) -> None:
        before = sample("voicehook_streamed_fragments_total")
        STREAMED_FRAGMENTS.inc(3)
        assert sample("voicehook_streamed_fragments_total") == before + 3

    def test_provider_errors_labelled(self) -> None:
        labels = {"error_type": "RateLimitError"}
        before = sample("voicehook_provider_errors_total", labels)
        PROVIDER_ERRORS.labels(**labels).inc()
        assert sample("voicehook_provider_errors_total", labels) == before + 1


class TestActiveSessions:
    """Tests for ACTIVE_SESSIONS gauge."""

    def test_gauge_set(self) -> None:
        ACTIVE_SESSIONS.set(4)
        assert sample("voicehook_active_sessions") == 4
