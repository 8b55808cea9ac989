"""SessionStore abstract interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from voicehook.conversation.models import Turn


class SessionLockTimeout(Exception):
    """Raised when a session's lock cannot be acquired in time."""

    def __init__(self, session_id: str, timeout: float) -> None:
        self.session_id = session_id
        self.timeout = timeout
        super().__init__(
            f"Session {session_id} is busy; lock not acquired within {timeout}s"
        )


class SessionStore(ABC):
    """Abstract interface for per-session turn history.

    History is append-only. Callers that read, generate and then append
    must hold `lock(session_id)` for the whole sequence so that two
    events for the same session cannot interleave.
    """

    @property
    @abstractmethod
    def backend(self) -> str:
        """Short backend name for logs and health output."""

    @abstractmethod
    async def get(self, session_id: str) -> list[Turn]:
        """Return the session's turns in order (empty for an unseen id)."""

    @abstractmethod
    async def append(self, session_id: str, *turns: Turn) -> int:
        """Atomically append turns, creating the session if needed.

        Returns:
            The session's turn count after the append
        """

    @abstractmethod
    def lock(self, session_id: str) -> AbstractAsyncContextManager[None]:
        """Exclusive per-session lock.

        Raises:
            SessionLockTimeout: If the lock is not acquired in time
        """

    @abstractmethod
    async def count(self) -> int:
        """Number of sessions currently held."""
