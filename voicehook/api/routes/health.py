"""Health check and metrics endpoints."""

from typing import Any

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from voicehook import __version__
from voicehook.api.dependencies import SessionStoreDep
from voicehook.observability.logging import get_logger
from voicehook.observability.metrics import ACTIVE_SESSIONS

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


@router.get("/health")
async def health_check(session_store: SessionStoreDep) -> dict[str, Any]:
    """Report service status and the session store in use."""
    sessions = await session_store.count()
    ACTIVE_SESSIONS.set(sessions)
    logger.debug("health_check_request", sessions=sessions)
    return {
        "status": "ok",
        "version": __version__,
        "session_store": session_store.backend,
        "sessions": sessions,
    }


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
