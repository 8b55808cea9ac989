"""Unit tests for RedisSessionStore against a mocked client."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import LockError

from voicehook.conversation.models import Turn
from voicehook.conversation.store import SessionLockTimeout
from voicehook.conversation.stores import RedisSessionStore


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_redis():
    """Create mock Redis client."""
    redis = AsyncMock()

    mock_lock = AsyncMock()
    mock_lock.acquire = AsyncMock(return_value=True)
    mock_lock.release = AsyncMock()

    redis.lock = MagicMock(return_value=mock_lock)
    redis.lrange = AsyncMock(return_value=[])
    redis.rpush = AsyncMock(return_value=2)
    redis.sadd = AsyncMock(return_value=1)
    redis.scard = AsyncMock(return_value=0)

    return redis


@pytest.fixture
def store(mock_redis) -> RedisSessionStore:
    return RedisSessionStore(
        mock_redis,
        key_prefix="test:session",
        lock_timeout=60,
        lock_blocking_timeout=5.0,
    )


# =============================================================================
# Tests: history
# =============================================================================


class TestRedisSessionHistory:
    """Tests for get/append/count."""

    @pytest.mark.asyncio
    async def test_get_empty(self, store, mock_redis) -> None:
        assert await store.get("s1") == []
        mock_redis.lrange.assert_awaited_once_with("test:session:s1", 0, -1)

    @pytest.mark.asyncio
    async def test_get_decodes_turns(self, store, mock_redis) -> None:
        stored = [Turn.user("hi", turn_id="t1"), Turn.assistant("hello", turn_id="t1")]
        mock_redis.lrange.return_value = [t.model_dump_json() for t in stored]

        history = await store.get("s1")

        assert history == stored

    @pytest.mark.asyncio
    async def test_append_pushes_all_turns_at_once(self, store, mock_redis) -> None:
        """Both turns go out in a single RPUSH."""
        user, assistant = Turn.user("hi"), Turn.assistant("hello")

        total = await store.append("s1", user, assistant)

        assert total == 2
        mock_redis.rpush.assert_awaited_once_with(
            "test:session:s1", user.model_dump_json(), assistant.model_dump_json()
        )
        mock_redis.sadd.assert_awaited_once_with("test:session:index", "s1")

    @pytest.mark.asyncio
    async def test_count_reads_index(self, store, mock_redis) -> None:
        mock_redis.scard.return_value = 7
        assert await store.count() == 7
        mock_redis.scard.assert_awaited_once_with("test:session:index")

    def test_backend_name(self, store) -> None:
        assert store.backend == "redis"


# =============================================================================
# Tests: locking
# =============================================================================


class TestRedisSessionLock:
    """Tests for the per-session Redis lock."""

    @pytest.mark.asyncio
    async def test_lock_uses_configured_timeouts(self, store, mock_redis) -> None:
        async with store.lock("s1"):
            pass

        mock_redis.lock.assert_called_once_with(
            "test:session:lock:s1",
            timeout=60,
            blocking_timeout=5.0,
        )

    @pytest.mark.asyncio
    async def test_releases_on_exit(self, store, mock_redis) -> None:
        mock_lock = mock_redis.lock.return_value

        async with store.lock("s1"):
            mock_lock.release.assert_not_awaited()

        mock_lock.release.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_releases_on_error(self, store, mock_redis) -> None:
        mock_lock = mock_redis.lock.return_value

        with pytest.raises(RuntimeError):
            async with store.lock("s1"):
                raise RuntimeError("boom")

        mock_lock.release.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_timeout_when_not_acquired(self, store, mock_redis) -> None:
        mock_lock = mock_redis.lock.return_value
        mock_lock.acquire = AsyncMock(return_value=False)

        with pytest.raises(SessionLockTimeout):
            async with store.lock("s1"):
                pass

        mock_lock.release.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_expired_lock_on_release_is_tolerated(self, store, mock_redis) -> None:
        """An expired lock is logged, not raised."""
        mock_lock = mock_redis.lock.return_value
        mock_lock.release = AsyncMock(side_effect=LockError("expired"))

        async with store.lock("s1"):
            pass
