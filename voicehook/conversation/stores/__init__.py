"""Session stores for conversation history."""

from voicehook.conversation.store import SessionLockTimeout, SessionStore
from voicehook.conversation.stores.inmemory import InMemorySessionStore
from voicehook.conversation.stores.redis import RedisSessionStore

__all__ = [
    "SessionLockTimeout",
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
]
