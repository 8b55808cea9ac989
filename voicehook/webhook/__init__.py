"""Inbound webhook handling for the voice platform.

Signature verification, payload models and the SSE response channel.
"""

from voicehook.webhook.models import DataEvent, EndEvent, TTSEvent, WebhookEvent
from voicehook.webhook.signature import sign_payload, verify_signature
from voicehook.webhook.stream import ResponseStream, StreamClosedError, stream_response

__all__ = [
    "WebhookEvent",
    "TTSEvent",
    "DataEvent",
    "EndEvent",
    "sign_payload",
    "verify_signature",
    "ResponseStream",
    "StreamClosedError",
    "stream_response",
]
