"""Configuration model exports.

    from voicehook.config.models import AgentConfig, StorageConfig
"""

from voicehook.config.models.agent import AgentConfig
from voicehook.config.models.api import APIConfig
from voicehook.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from voicehook.config.models.providers import LLMProviderConfig, ProvidersConfig
from voicehook.config.models.storage import SessionStoreConfig, StorageConfig
from voicehook.config.models.webhook import WebhookConfig

__all__ = [
    "AgentConfig",
    "APIConfig",
    "LLMProviderConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "ProvidersConfig",
    "SessionStoreConfig",
    "StorageConfig",
    "WebhookConfig",
]
