"""Conversation domain models.

- Turns: one role-tagged contribution with text content
- Enums for turn roles and special-cased webhook event types
"""

from voicehook.conversation.models.enums import (
    OTHER_EVENT_LABEL,
    EventType,
    TurnRole,
    event_type_label,
)
from voicehook.conversation.models.turn import TextPart, Turn

__all__ = [
    "EventType",
    "OTHER_EVENT_LABEL",
    "event_type_label",
    "TurnRole",
    "TextPart",
    "Turn",
]
