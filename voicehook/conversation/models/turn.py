"""Turn models for conversation domain."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from voicehook.conversation.models.enums import TurnRole


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class TextPart(BaseModel):
    """One plain-text segment of a turn's content."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class Turn(BaseModel):
    """A single role-tagged contribution to a conversation.

    Turns are frozen: history is append-only and a committed turn is never
    edited in place.
    """

    model_config = ConfigDict(frozen=True)

    role: TurnRole = Field(..., description="user or assistant")
    content: tuple[TextPart, ...] = Field(..., description="Ordered text segments")
    turn_id: str | None = Field(
        default=None, description="Platform turn id the turn belongs to"
    )
    created_at: datetime = Field(default_factory=utc_now, description="Creation time")

    @classmethod
    def user(cls, text: str, turn_id: str | None = None) -> "Turn":
        return cls(role=TurnRole.USER, content=(TextPart(text=text),), turn_id=turn_id)

    @classmethod
    def assistant(cls, text: str, turn_id: str | None = None) -> "Turn":
        return cls(
            role=TurnRole.ASSISTANT, content=(TextPart(text=text),), turn_id=turn_id
        )

    @property
    def text(self) -> str:
        """Content segments joined into a single string."""
        return "".join(part.text for part in self.content)
