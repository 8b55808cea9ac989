"""Inbound webhook payload and outbound stream event models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class WebhookEvent(BaseModel):
    """One validated webhook call from the voice platform.

    Unknown keys are ignored; the four fields below are required strings.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str = Field(..., description="Transcribed user utterance (may be empty)")
    type: str = Field(..., description="Event type, e.g. session.start or message")
    session_id: str = Field(..., description="Voice session identifier")
    turn_id: str = Field(..., description="Platform turn identifier")


class TTSEvent(BaseModel):
    """Text for the platform to synthesize and speak."""

    type: Literal["response.tts"] = "response.tts"
    content: str
    turn_id: str


class DataEvent(BaseModel):
    """Arbitrary JSON forwarded verbatim to the client UI."""

    type: Literal["response.data"] = "response.data"
    content: Any
    turn_id: str


class EndEvent(BaseModel):
    """Marks the assistant's response for this turn as complete."""

    type: Literal["response.end"] = "response.end"
    turn_id: str


StreamEvent = TTSEvent | DataEvent | EndEvent
