"""LLM provider configuration models."""

from pydantic import BaseModel, Field


class LLMProviderConfig(BaseModel):
    """Configuration for the text-generation model.

    The API key is never read from here; it comes from the
    GOOGLE_GENERATIVE_AI_API_KEY environment variable on each request.
    """

    model: str = Field(
        default="google/gemini-2.0-flash-001",
        description="Model string: '<provider>/<model id>'",
    )
    max_tokens: int = Field(
        default=1024,
        gt=0,
        description="Maximum tokens per reply",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )


class ProvidersConfig(BaseModel):
    """Container for provider configuration."""

    llm: LLMProviderConfig = Field(default_factory=LLMProviderConfig)
