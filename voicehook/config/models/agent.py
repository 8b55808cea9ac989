"""Voice agent persona configuration."""

from typing import Any

from pydantic import BaseModel, Field

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful conversation assistant. You should respond to the "
    "user's message in a conversational manner. Your output will be spoken "
    "by a TTS model. You should respond in a way that is easy for the TTS "
    "model to speak and sound natural."
)

DEFAULT_WELCOME_MESSAGE = "Welcome to Layercode. How can I help you today?"


class AgentConfig(BaseModel):
    """Persona and canned messages used by the turn orchestrator."""

    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="System instruction sent with every model call",
    )
    welcome_message: str = Field(
        default=DEFAULT_WELCOME_MESSAGE,
        description="Spoken on session.start without calling the model",
    )
    ui_data: dict[str, Any] | None = Field(
        default=None,
        description="Optional payload sent on the data channel before a reply streams",
    )
