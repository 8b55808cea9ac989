"""Root settings model for voicehook configuration."""

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from voicehook.config.models.agent import AgentConfig
from voicehook.config.models.api import APIConfig
from voicehook.config.models.observability import ObservabilityConfig
from voicehook.config.models.providers import ProvidersConfig
from voicehook.config.models.storage import StorageConfig
from voicehook.config.models.webhook import WebhookConfig

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# TOML values consumed by TomlConfigSettingsSource
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads from the loaded TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{VOICEHOOK_ENV}.toml (environment overrides)
    4. VOICEHOOK_* environment variables (runtime overrides)

    Secrets are deliberately absent; see voicehook.config.secrets.
    """

    model_config = SettingsConfigDict(
        env_prefix="VOICEHOOK_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="voicehook", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(default="INFO", description="Logging level")

    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    agent: AgentConfig = Field(
        default_factory=AgentConfig,
        description="Voice agent persona and canned messages",
    )
    providers: ProvidersConfig = Field(
        default_factory=ProvidersConfig,
        description="LLM provider configuration",
    )
    webhook: WebhookConfig = Field(
        default_factory=WebhookConfig,
        description="Inbound webhook verification",
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig,
        description="Session storage configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority order: init args, VOICEHOOK_* env vars, TOML, model defaults."""
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )
