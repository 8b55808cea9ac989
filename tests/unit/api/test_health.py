"""Unit tests for health check and metrics endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from voicehook import __version__
from voicehook.api.dependencies import get_session_store, reset_dependencies
from voicehook.api.routes.health import metrics_router, router
from voicehook.conversation.models import Turn
from voicehook.conversation.stores import InMemorySessionStore


@pytest.fixture
def session_store() -> InMemorySessionStore:
    """In-memory session store."""
    return InMemorySessionStore()


@pytest.fixture
async def app(session_store: InMemorySessionStore) -> FastAPI:
    """Create test FastAPI app."""
    await reset_dependencies()

    app = FastAPI()
    app.include_router(router)
    app.include_router(metrics_router)
    app.dependency_overrides[get_session_store] = lambda: session_store

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "session_store": "inmemory",
            "sessions": 0,
        }

    @pytest.mark.asyncio
    async def test_health_counts_sessions(
        self, client: TestClient, session_store: InMemorySessionStore
    ) -> None:
        await session_store.append("s1", Turn.user(""))
        await session_store.append("s2", Turn.user(""))

        assert client.get("/health").json()["sessions"] == 2


class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    def test_metrics_exposition(self, client: TestClient) -> None:
        client.get("/health")
        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "voicehook_active_sessions" in response.text


class TestAppRoutes:
    """Tests for routes registered by create_app."""

    def test_metrics_can_be_disabled(self) -> None:
        from voicehook.api.app import create_app
        from voicehook.config.settings import Settings

        app = create_app(Settings(observability={"metrics": {"enabled": False}}))
        paths = {route.path for route in app.routes}

        assert "/health" in paths
        assert "/agent" in paths
        assert "/metrics" not in paths
