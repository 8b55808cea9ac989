"""In-memory implementation of SessionStore."""

import asyncio
from collections import OrderedDict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from voicehook.conversation.models import Turn
from voicehook.conversation.store import SessionLockTimeout, SessionStore
from voicehook.observability.logging import get_logger

logger = get_logger(__name__)


class InMemorySessionStore(SessionStore):
    """Process-local session store.

    Sessions live for the lifetime of the process. When max_sessions is
    set, the least recently touched session whose lock nobody holds or
    awaits is evicted once the bound is exceeded.
    """

    def __init__(
        self,
        max_sessions: int | None = None,
        lock_blocking_timeout: float = 30.0,
    ) -> None:
        self._sessions: OrderedDict[str, list[Turn]] = OrderedDict()
        self._locks: dict[str, asyncio.Lock] = {}
        # Holders plus waiters per session lock
        self._lock_users: dict[str, int] = {}
        self._max_sessions = max_sessions
        self._lock_blocking_timeout = lock_blocking_timeout

    @property
    def backend(self) -> str:
        return "inmemory"

    async def get(self, session_id: str) -> list[Turn]:
        turns = self._sessions.get(session_id)
        if turns is None:
            return []
        self._sessions.move_to_end(session_id)
        return list(turns)

    async def append(self, session_id: str, *turns: Turn) -> int:
        history = self._sessions.setdefault(session_id, [])
        history.extend(turns)
        self._sessions.move_to_end(session_id)
        self._evict()
        return len(history)

    @asynccontextmanager
    async def lock(self, session_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(session_id, asyncio.Lock())
        self._lock_users[session_id] = self._lock_users.get(session_id, 0) + 1
        try:
            try:
                await asyncio.wait_for(
                    lock.acquire(), timeout=self._lock_blocking_timeout
                )
            except TimeoutError as e:
                raise SessionLockTimeout(session_id, self._lock_blocking_timeout) from e
            try:
                yield
            finally:
                lock.release()
        finally:
            self._release_user(session_id)

    async def count(self) -> int:
        return len(self._sessions)

    def _release_user(self, session_id: str) -> None:
        remaining = self._lock_users[session_id] - 1
        if remaining:
            self._lock_users[session_id] = remaining
            return
        del self._lock_users[session_id]
        if session_id not in self._sessions:
            self._locks.pop(session_id, None)

    def _evict(self) -> None:
        if self._max_sessions is None:
            return
        while len(self._sessions) > self._max_sessions:
            # A session whose lock is held or awaited keeps its lock object
            victim = next(
                (sid for sid in self._sessions if sid not in self._lock_users),
                None,
            )
            if victim is None:
                return
            del self._sessions[victim]
            self._locks.pop(victim, None)
            logger.info("session_evicted", session_id=victim)
