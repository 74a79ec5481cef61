"""LLM adapters and factory helpers."""

from nutrition_nl2sql.config import Settings
from nutrition_nl2sql.llm.anthropic_adapter import AnthropicAdapter
from nutrition_nl2sql.llm.base import LLMClient, LLMError
from nutrition_nl2sql.llm.openai_adapter import OpenAIAdapter


def create_llm_client(settings: Settings) -> LLMClient:
    """Create the LLM client selected by LLM_PROVIDER."""
    if settings.llm_provider == "openai":
        return OpenAIAdapter(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout_seconds=settings.llm_timeout_seconds,
        )
    return AnthropicAdapter(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        timeout_seconds=settings.llm_timeout_seconds,
    )


__all__ = [
    "AnthropicAdapter",
    "LLMClient",
    "LLMError",
    "OpenAIAdapter",
    "create_llm_client",
]
