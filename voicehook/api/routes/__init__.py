"""API route registration."""

from fastapi import FastAPI

from voicehook.config.settings import Settings
from voicehook.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register the webhook, health and (optionally) metrics routes."""
    from voicehook.api.routes.health import metrics_router
    from voicehook.api.routes.health import router as health_router
    from voicehook.api.routes.webhook import create_webhook_router

    app.include_router(create_webhook_router(settings.api.webhook_path), tags=["Webhook"])
    app.include_router(health_router, tags=["Health"])
    if settings.observability.metrics.enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info(
        "routes_registered",
        webhook_path=settings.api.webhook_path,
        metrics=settings.observability.metrics.enabled,
    )
