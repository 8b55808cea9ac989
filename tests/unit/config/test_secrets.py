"""Unit tests for per-request secret resolution."""

import pytest

from voicehook.api.exceptions import ConfigurationError
from voicehook.config.secrets import (
    LLM_API_KEY_VAR,
    WEBHOOK_SECRET_VAR,
    SecretSource,
)


class TestSecretSource:
    """Tests for SecretSource."""

    def test_load_both_secrets(self) -> None:
        source = SecretSource({LLM_API_KEY_VAR: "key", WEBHOOK_SECRET_VAR: "whsec"})
        secrets = source.load()
        assert secrets.llm_api_key.get_secret_value() == "key"
        assert secrets.webhook_secret.get_secret_value() == "whsec"

    def test_secrets_hidden_in_repr(self) -> None:
        """Secret values never appear in the model's repr."""
        source = SecretSource({LLM_API_KEY_VAR: "key-123", WEBHOOK_SECRET_VAR: "whsec-456"})
        rendered = repr(source.load())
        assert "key-123" not in rendered
        assert "whsec-456" not in rendered

    def test_missing_llm_key(self) -> None:
        source = SecretSource({WEBHOOK_SECRET_VAR: "whsec"})
        with pytest.raises(ConfigurationError, match="GOOGLE_GENERATIVE_AI_API_KEY is not set"):
            source.load()

    def test_missing_webhook_secret(self) -> None:
        source = SecretSource({LLM_API_KEY_VAR: "key"})
        with pytest.raises(ConfigurationError, match="LAYERCODE_WEBHOOK_SECRET is not set"):
            source.load()

    def test_llm_key_checked_first(self) -> None:
        """With both missing, the LLM key is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            SecretSource({}).load()
        assert exc_info.value.message == "GOOGLE_GENERATIVE_AI_API_KEY is not set"

    def test_empty_value_counts_as_missing(self) -> None:
        source = SecretSource({LLM_API_KEY_VAR: "", WEBHOOK_SECRET_VAR: "whsec"})
        with pytest.raises(ConfigurationError):
            source.load()

    def test_reads_process_environment_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(LLM_API_KEY_VAR, "env-key")
        monkeypatch.setenv(WEBHOOK_SECRET_VAR, "env-secret")
        secrets = SecretSource().load()
        assert secrets.llm_api_key.get_secret_value() == "env-key"

    def test_environment_read_per_call(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Removing a variable later is noticed on the next load."""
        monkeypatch.setenv(LLM_API_KEY_VAR, "env-key")
        monkeypatch.setenv(WEBHOOK_SECRET_VAR, "env-secret")
        source = SecretSource()
        source.load()
        monkeypatch.delenv(WEBHOOK_SECRET_VAR)
        with pytest.raises(ConfigurationError):
            source.load()
