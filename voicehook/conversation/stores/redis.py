"""Redis implementation of SessionStore.

Each session is a Redis list of JSON-encoded turns, so an append is a
single RPUSH and is atomic on the server. Per-session serialization uses
a Redis lock, which also holds across multiple worker processes.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from redis.asyncio import Redis
from redis.exceptions import LockError

from voicehook.conversation.models import Turn
from voicehook.conversation.store import SessionLockTimeout, SessionStore
from voicehook.observability.logging import get_logger

logger = get_logger(__name__)


class RedisSessionStore(SessionStore):
    """Session store backed by Redis lists.

    Key layout:
        {prefix}:{session_id}        list of Turn JSON, oldest first
        {prefix}:index               set of known session ids
        {prefix}:lock:{session_id}   per-session lock
    """

    def __init__(
        self,
        redis: Redis,
        key_prefix: str = "voicehook:session",
        lock_timeout: int = 120,
        lock_blocking_timeout: float = 30.0,
    ) -> None:
        self._redis = redis
        self._prefix = key_prefix
        self._lock_timeout = lock_timeout
        self._lock_blocking_timeout = lock_blocking_timeout

    @property
    def backend(self) -> str:
        return "redis"

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}:{session_id}"

    def _index_key(self) -> str:
        return f"{self._prefix}:index"

    def _lock_key(self, session_id: str) -> str:
        return f"{self._prefix}:lock:{session_id}"

    async def get(self, session_id: str) -> list[Turn]:
        raw = await self._redis.lrange(self._key(session_id), 0, -1)
        return [Turn.model_validate_json(item) for item in raw]

    async def append(self, session_id: str, *turns: Turn) -> int:
        payloads = [turn.model_dump_json() for turn in turns]
        length = await self._redis.rpush(self._key(session_id), *payloads)
        await self._redis.sadd(self._index_key(), session_id)
        return int(length)

    @asynccontextmanager
    async def lock(self, session_id: str) -> AsyncIterator[None]:
        lock = self._redis.lock(
            self._lock_key(session_id),
            timeout=self._lock_timeout,
            blocking_timeout=self._lock_blocking_timeout,
        )
        acquired = await lock.acquire()
        if not acquired:
            raise SessionLockTimeout(session_id, self._lock_blocking_timeout)
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                # Lock expired while the turn was still running
                logger.warning("session_lock_expired", session_id=session_id)

    async def count(self) -> int:
        return int(await self._redis.scard(self._index_key()))
