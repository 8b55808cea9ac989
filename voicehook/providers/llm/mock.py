"""Mock LLM provider for testing."""

import asyncio
from collections.abc import AsyncIterator, Sequence
from typing import Any

from voicehook.providers.llm.base import (
    GenerationStream,
    LLMMessage,
    LLMProvider,
    ProviderError,
)


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing.

    Streams a scripted list of tokens without making API calls. Can be
    told to raise after a number of tokens to simulate a provider
    dropping mid-stream, or to pause between tokens so tests can cancel
    a turn while it is in flight.
    """

    def __init__(
        self,
        tokens: Sequence[str] = ("Mock", " response"),
        default_model: str = "mock-model",
        fail_after: int | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        """Initialize mock provider.

        Args:
            tokens: Fragments to stream, in order
            default_model: Model name to report
            fail_after: Raise after this many fragments have been yielded
            error: Exception raised when fail_after triggers
            delay: Seconds to sleep before each fragment
        """
        self._tokens = list(tokens)
        self._default_model = default_model
        self._fail_after = fail_after
        self._error = error or ProviderError("mock provider failure")
        self._delay = delay
        self._call_history: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def clear_history(self) -> None:
        self._call_history.clear()

    def set_tokens(self, tokens: Sequence[str]) -> None:
        self._tokens = list(tokens)

    def stream(
        self,
        messages: list[LLMMessage],
        *,
        system_prompt: str | None = None,
    ) -> GenerationStream:
        self._call_history.append({
            "messages": list(messages),
            "system_prompt": system_prompt,
            "model": self._default_model,
        })
        return GenerationStream(self._generate(list(self._tokens)), self._default_model)

    async def _generate(self, tokens: list[str]) -> AsyncIterator[str]:
        for index, token in enumerate(tokens):
            if self._fail_after is not None and index >= self._fail_after:
                raise self._error
            if self._delay:
                await asyncio.sleep(self._delay)
            yield token
        if self._fail_after is not None and self._fail_after >= len(tokens):
            raise self._error
