"""Voice platform webhook endpoint."""

from fastapi import APIRouter, Request
from sse_starlette.sse import EventSourceResponse

from voicehook.api.dependencies import OrchestratorDep, SecretSourceDep, SettingsDep
from voicehook.api.exceptions import ConfigurationError, InvalidSignatureError
from voicehook.conversation.models import event_type_label
from voicehook.observability.logging import get_logger
from voicehook.observability.metrics import WEBHOOK_REQUESTS
from voicehook.webhook.models import WebhookEvent
from voicehook.webhook.signature import verify_signature
from voicehook.webhook.stream import ResponseStream, stream_response

logger = get_logger(__name__)


async def receive_webhook(
    event: WebhookEvent,
    request: Request,
    orchestrator: OrchestratorDep,
    secret_source: SecretSourceDep,
    settings: SettingsDep,
) -> EventSourceResponse:
    """Authenticate one webhook call and stream the agent's reply.

    The body has already been validated by the time this runs. Missing
    secrets and bad signatures are rejected here, before the session is
    touched; anything after that is reported on the event stream.

    Returns:
        EventSourceResponse carrying response.tts / response.data /
        response.end events
    """
    event_label = event_type_label(event.type)

    try:
        secrets = secret_source.load()
    except ConfigurationError:
        WEBHOOK_REQUESTS.labels(event_type=event_label, outcome="config_error").inc()
        raise

    raw_body = (await request.body()).decode("utf-8")
    signature = request.headers.get(settings.webhook.signature_header, "")

    if not verify_signature(
        raw_body,
        signature,
        secrets.webhook_secret.get_secret_value(),
        tolerance_seconds=settings.webhook.tolerance_seconds,
    ):
        WEBHOOK_REQUESTS.labels(event_type=event_label, outcome="unauthorized").inc()
        logger.warning(
            "invalid_signature",
            session_id=event.session_id,
            turn_id=event.turn_id,
            signature_present=bool(signature),
        )
        raise InvalidSignatureError()

    WEBHOOK_REQUESTS.labels(event_type=event_label, outcome="accepted").inc()
    logger.info(
        "webhook_received",
        event_type=event.type,
        session_id=event.session_id,
        turn_id=event.turn_id,
    )

    async def handle(stream: ResponseStream) -> None:
        await orchestrator.handle(event, stream, secrets)

    return stream_response(event.turn_id, handle)


def create_webhook_router(path: str = "/agent") -> APIRouter:
    """Router exposing the webhook at the configured path."""
    router = APIRouter()
    router.add_api_route(path, receive_webhook, methods=["POST"])
    return router
