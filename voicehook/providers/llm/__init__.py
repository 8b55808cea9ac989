"""LLM providers for streamed text generation.

The production interface is LLMExecutor, which routes a model string
(e.g. "google/gemini-2.0-flash-001") to the matching Agno model class.
"""

from voicehook.providers.llm.base import (
    AuthenticationError,
    ContentFilterError,
    GenerationStream,
    LLMMessage,
    LLMProvider,
    LLMResponse,
    ModelError,
    ProviderError,
    RateLimitError,
)
from voicehook.providers.llm.executor import LLMExecutor, create_executor
from voicehook.providers.llm.mock import MockLLMProvider

__all__ = [
    # Data models
    "LLMMessage",
    "LLMResponse",
    "GenerationStream",
    "LLMProvider",
    # Errors
    "ProviderError",
    "AuthenticationError",
    "RateLimitError",
    "ModelError",
    "ContentFilterError",
    # Executor
    "LLMExecutor",
    "create_executor",
    # Testing
    "MockLLMProvider",
]
