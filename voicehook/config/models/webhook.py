"""Inbound webhook verification configuration."""

from pydantic import BaseModel, Field


class WebhookConfig(BaseModel):
    """Signature verification settings for inbound webhook calls."""

    signature_header: str = Field(
        default="layercode-signature",
        description="Header carrying 't=<timestamp>,v1=<hmac>'",
    )
    tolerance_seconds: int | None = Field(
        default=300,
        ge=0,
        description="Maximum signature age; None disables the timestamp check",
    )
