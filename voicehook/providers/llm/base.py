"""LLM data models, provider interface and error types.

- LLMMessage: input message format
- LLMResponse: the completion delivered once a stream is exhausted
- GenerationStream: two-phase result of LLMProvider.stream()
- Error types for different failure modes
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, Field


class LLMMessage(BaseModel):
    """A message in a conversation."""

    role: str = Field(..., description="Role: system, user, or assistant")
    content: str = Field(..., description="Message content")


class LLMResponse(BaseModel):
    """Final reply from a model call."""

    content: str = Field(..., description="Generated text")
    model: str = Field(..., description="Model used")
    finish_reason: str | None = Field(
        default=None, description="Why generation stopped"
    )
    parts: list[str] = Field(
        default_factory=list, description="Fragments in the order they streamed"
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Execution metadata"
    )


# ============================================================================
# Error Types
# ============================================================================


class ProviderError(Exception):
    """Base exception for LLM provider errors."""

    pass


class AuthenticationError(ProviderError):
    """Invalid or missing API key."""

    pass


class RateLimitError(ProviderError):
    """Rate limit exceeded."""

    pass


class ModelError(ProviderError):
    """Model not found or unavailable."""

    pass


class ContentFilterError(ProviderError):
    """Content blocked by safety filter."""

    pass


# ============================================================================
# Streaming
# ============================================================================


class GenerationStream:
    """A lazy, finite, single-use sequence of text fragments.

    Iterate it to receive fragments as the model produces them. Once the
    underlying source is exhausted, `response` holds the completion with
    the full reply. If iteration stops early (error or cancellation) no
    completion is ever produced.

        stream = provider.stream(messages, system_prompt=prompt)
        async for fragment in stream:
            ...
        reply = stream.response
    """

    def __init__(self, fragments: AsyncIterator[str], model: str) -> None:
        self._fragments = fragments
        self._model = model
        self._parts: list[str] = []
        self._started = False
        self._response: LLMResponse | None = None

    def __aiter__(self) -> AsyncIterator[str]:
        if self._started:
            raise RuntimeError("GenerationStream can only be iterated once")
        self._started = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        async for fragment in self._fragments:
            if not fragment:
                continue
            self._parts.append(fragment)
            yield fragment
        self._response = LLMResponse(
            content="".join(self._parts),
            model=self._model,
            finish_reason="stop",
            parts=list(self._parts),
        )

    @property
    def completed(self) -> bool:
        return self._response is not None

    @property
    def response(self) -> LLMResponse:
        """Completion for the stream; only available after exhaustion."""
        if self._response is None:
            raise RuntimeError("GenerationStream has not completed")
        return self._response


class LLMProvider(ABC):
    """Interface for a streaming text-generation provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""

    @abstractmethod
    def stream(
        self,
        messages: list[LLMMessage],
        *,
        system_prompt: str | None = None,
    ) -> GenerationStream:
        """Start a streamed generation over the role-tagged history."""
