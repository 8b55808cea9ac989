"""Dependency injection for API routes.

Provides FastAPI dependencies for the session store, LLM provider factory
and turn orchestrator. Instances are created once and reused; tests can
swap them through `app.dependency_overrides` or reset them with
`reset_dependencies()`.
"""

from functools import lru_cache
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from voicehook.agent.orchestrator import ProviderFactory, TurnOrchestrator
from voicehook.config.loader import load_config, platform_overrides
from voicehook.config.secrets import SecretSource
from voicehook.config.settings import Settings, set_toml_config
from voicehook.conversation.store import SessionStore
from voicehook.conversation.stores.inmemory import InMemorySessionStore
from voicehook.conversation.stores.redis import RedisSessionStore
from voicehook.observability.logging import get_logger
from voicehook.providers.llm import LLMProvider, create_executor

logger = get_logger(__name__)

_redis_client: redis.Redis | None = None
_session_store: SessionStore | None = None
_orchestrator: TurnOrchestrator | None = None
_providers: dict[str, LLMProvider] = {}


@lru_cache
def get_settings() -> Settings:
    """Get application settings.

    Loads configuration from TOML files and environment variables.
    Cached to avoid reloading on every request.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_config(platform_overrides())

    return Settings()


def get_secret_source() -> SecretSource:
    """Secrets are looked up from the environment on every request."""
    return SecretSource()


def get_redis_client(settings: Settings) -> redis.Redis:
    """Get the shared Redis client."""
    global _redis_client
    if _redis_client is None:
        redis_url = settings.storage.session.redis_url
        _redis_client = redis.from_url(redis_url, decode_responses=True)
        logger.info("redis_client_created", url=redis_url.split("@")[-1])
    return _redis_client


def get_session_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionStore:
    """Get the SessionStore selected by storage.session.backend."""
    global _session_store
    if _session_store is None:
        config = settings.storage.session
        if config.backend == "redis":
            _session_store = RedisSessionStore(
                get_redis_client(settings),
                key_prefix=config.key_prefix,
                lock_timeout=config.lock_timeout,
                lock_blocking_timeout=config.lock_blocking_timeout,
            )
        else:
            _session_store = InMemorySessionStore(
                max_sessions=config.max_sessions,
                lock_blocking_timeout=config.lock_blocking_timeout,
            )
        logger.info("session_store_initialized", store_type=config.backend)
    return _session_store


def get_provider_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ProviderFactory:
    """Factory that returns one executor per distinct API key."""
    llm_config = settings.providers.llm

    def factory(api_key: str) -> LLMProvider:
        provider = _providers.get(api_key)
        if provider is None:
            provider = create_executor(llm_config, api_key)
            _providers.clear()
            _providers[api_key] = provider
            logger.info("llm_provider_initialized", model=llm_config.model)
        return provider

    return factory


def get_orchestrator(
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    provider_factory: Annotated[ProviderFactory, Depends(get_provider_factory)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TurnOrchestrator:
    """Get the TurnOrchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = TurnOrchestrator(
            session_store=session_store,
            provider_factory=provider_factory,
            config=settings.agent,
        )
        logger.info("turn_orchestrator_initialized")
    return _orchestrator


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
SecretSourceDep = Annotated[SecretSource, Depends(get_secret_source)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
OrchestratorDep = Annotated[TurnOrchestrator, Depends(get_orchestrator)]


async def reset_dependencies() -> None:
    """Reset all cached dependencies.

    Used for testing to ensure fresh instances. Closes the Redis client
    before resetting.
    """
    global _redis_client, _session_store, _orchestrator

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None

    _session_store = None
    _orchestrator = None
    _providers.clear()
    get_settings.cache_clear()
