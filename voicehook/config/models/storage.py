"""Session storage configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

SessionBackendType = Literal["inmemory", "redis"]


class SessionStoreConfig(BaseModel):
    """Configuration for the session turn-history store."""

    backend: SessionBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    redis_url: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL (REDIS_URL from the host overrides the TOML value)",
    )
    key_prefix: str = Field(
        default="voicehook:session",
        description="Redis key prefix for session keys",
    )
    lock_timeout: int = Field(
        default=120,
        gt=0,
        description="Seconds a per-session lock is held before auto-release",
    )
    lock_blocking_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a busy session before giving up",
    )
    max_sessions: int | None = Field(
        default=None,
        gt=0,
        description="In-memory only: evict least recently used sessions past this count",
    )


class StorageConfig(BaseModel):
    """Container for storage configuration."""

    session: SessionStoreConfig = Field(default_factory=SessionStoreConfig)
