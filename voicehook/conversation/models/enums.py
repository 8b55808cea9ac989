"""Enums for conversation domain."""

from enum import Enum


class TurnRole(str, Enum):
    """Who contributed a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class EventType(str, Enum):
    """Webhook event types that get dedicated handling.

    Any other type string takes the generic model-reply path.
    """

    SESSION_START = "session.start"
    MESSAGE = "message"


OTHER_EVENT_LABEL = "other"


def event_type_label(event_type: str) -> str:
    """Metric label for a client-supplied event type.

    Unknown types share one label so metric cardinality stays bounded.
    """
    try:
        return EventType(event_type).value
    except ValueError:
        return OTHER_EVENT_LABEL
