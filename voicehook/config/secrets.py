"""Per-request access to the two mandatory secrets.

The secrets are read from the process environment every time they are
requested rather than cached with Settings, so a deployment that is
missing one fails each request with a configuration error instead of
refusing to boot.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, SecretStr

from voicehook.api.exceptions import ConfigurationError

LLM_API_KEY_VAR = "GOOGLE_GENERATIVE_AI_API_KEY"
WEBHOOK_SECRET_VAR = "LAYERCODE_WEBHOOK_SECRET"


class Secrets(BaseModel):
    """Resolved secrets for one request."""

    llm_api_key: SecretStr
    webhook_secret: SecretStr


class SecretSource:
    """Reads required secrets from a mapping (os.environ by default)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def _lookup(self, name: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name) or None

    def require(self, name: str) -> str:
        """Return the named secret or raise ConfigurationError."""
        value = self._lookup(name)
        if value is None:
            raise ConfigurationError(f"{name} is not set")
        return value

    def load(self) -> Secrets:
        """Resolve both secrets, LLM key first."""
        return Secrets(
            llm_api_key=SecretStr(self.require(LLM_API_KEY_VAR)),
            webhook_secret=SecretStr(self.require(WEBHOOK_SECRET_VAR)),
        )
