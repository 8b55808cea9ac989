"""LLM Executor - streams replies from the configured model using Agno.

The executor handles:
- Model selection and API routing based on model string prefix
- Mapping provider failures onto the ProviderError hierarchy
- Observability (latency, fragment counts)

Model string formats:
- google/{model} -> Agno Gemini, authenticated with the request's API key
- mock/{name} -> canned reply, for local development without a key

Streaming has no fallback chain and no retries: a failure ends the turn.
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from voicehook.observability.logging import get_logger
from voicehook.providers.llm.base import (
    AuthenticationError,
    ContentFilterError,
    GenerationStream,
    LLMMessage,
    LLMProvider,
    ModelError,
    ProviderError,
    RateLimitError,
)

if TYPE_CHECKING:
    from agno.agent import Agent

    from voicehook.config.models.providers import LLMProviderConfig

logger = get_logger(__name__)

# Agno stream event names
RUN_CONTENT_EVENT = "RunContent"
RUN_ERROR_EVENT = "RunError"

MOCK_REPLY = "This is a mock reply from the development model."


class LLMExecutor(LLMProvider):
    """Streams text from one model through an Agno agent.

    Example:
        executor = LLMExecutor(
            model="google/gemini-2.0-flash-001",
            api_key=secrets.llm_api_key.get_secret_value(),
        )

        stream = executor.stream(
            [LLMMessage(role="user", content="Hello")],
            system_prompt="Be brief.",
        )
        async for fragment in stream:
            ...
    """

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.7,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._agent: Agent | None = None

    @property
    def model(self) -> str:
        """Model string this executor serves."""
        return self._model

    @property
    def provider_name(self) -> str:
        provider_type, _ = self._parse_model(self._model)
        return provider_type

    def stream(
        self,
        messages: list[LLMMessage],
        *,
        system_prompt: str | None = None,
    ) -> GenerationStream:
        return GenerationStream(
            self._stream_impl(messages, system_prompt),
            self._model,
        )

    # ========================================================================
    # Internal: Agno-based execution
    # ========================================================================

    def _get_or_create_agent(self) -> Agent:
        if self._agent is not None:
            return self._agent

        from agno.agent import Agent

        self._agent = Agent(
            model=self._create_agno_model(),
            markdown=False,
        )
        return self._agent

    def _create_agno_model(self) -> Any:
        provider_type, api_model = self._parse_model(self._model)

        if provider_type == "google":
            from agno.models.google import Gemini

            return Gemini(
                id=api_model,
                api_key=self._api_key,
                temperature=self._temperature,
                max_output_tokens=self._max_tokens,
            )

        raise ModelError(f"Unsupported model provider '{provider_type}' in {self._model}")

    def _format_messages_for_agno(self, messages: list[LLMMessage]) -> str:
        """Render the history as the single input string Agno expects.

        A lone user message is passed through as-is; longer histories are
        rendered as a labelled transcript.
        """
        history = [m for m in messages if m.role != "system"]

        if len(history) == 1:
            return history[0].content

        parts = []
        for msg in history:
            if msg.role == "user":
                parts.append(f"User: {msg.content}")
            elif msg.role == "assistant":
                parts.append(f"Assistant: {msg.content}")
        return "\n\n".join(parts)

    async def _stream_impl(
        self,
        messages: list[LLMMessage],
        system_prompt: str | None,
    ) -> AsyncIterator[str]:
        provider_type, _ = self._parse_model(self._model)

        if provider_type == "mock":
            for word in MOCK_REPLY.split(" "):
                yield word + " "
            return

        input_text = self._format_messages_for_agno(messages)
        start_time = time.perf_counter()
        fragments = 0

        try:
            agent = self._get_or_create_agent()
            if system_prompt:
                agent.instructions = [system_prompt]

            async for chunk in agent.arun(input_text, stream=True):
                event = getattr(chunk, "event", None)
                if event == RUN_ERROR_EVENT:
                    raise self._classify(str(getattr(chunk, "content", "") or "run error"))
                if event != RUN_CONTENT_EVENT:
                    continue
                content = getattr(chunk, "content", None)
                if isinstance(content, str) and content:
                    fragments += 1
                    yield content
        except ProviderError:
            raise
        except Exception as e:
            logger.error(
                "streaming_failed",
                model=self._model,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise self._classify(str(e)) from e

        logger.debug(
            "executor_stream_complete",
            model=self._model,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
            fragments=fragments,
        )

    def _classify(self, message: str) -> ProviderError:
        lowered = message.lower()
        if ("rate" in lowered and "limit" in lowered) or "429" in lowered:
            return RateLimitError(f"Rate limited: {message}")
        if "api key" in lowered or "api_key" in lowered or "permission" in lowered:
            return AuthenticationError(f"Authentication failed: {message}")
        if "safety" in lowered or "blocked" in lowered:
            return ContentFilterError(f"Content blocked: {message}")
        return ProviderError(f"Agno execution failed: {message}")

    def _parse_model(self, model: str) -> tuple[str, str]:
        """Parse model string into (provider_type, api_model).

        Examples:
            "google/gemini-2.0-flash-001" -> ("google", "gemini-2.0-flash-001")
            "mock/dev" -> ("mock", "dev")
            "gemini-2.0-flash-001" -> ("google", "gemini-2.0-flash-001")
        """
        parts = model.split("/", 1)
        if len(parts) == 2:
            return parts[0], parts[1]
        return "google", model


def create_executor(config: LLMProviderConfig, api_key: str) -> LLMExecutor:
    """Create an LLMExecutor from provider configuration and a request's key."""
    return LLMExecutor(
        model=config.model,
        api_key=api_key,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
