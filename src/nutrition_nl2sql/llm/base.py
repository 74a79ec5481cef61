"""Provider-independent LLM text-completion interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LLMError(RuntimeError):
    """Raised when LLM completion fails or returns unusable output."""


class LLMClient(ABC):
    """Abstract one-shot prompt/response adapter."""

    @abstractmethod
    async def complete(self, prompt: str, *, max_tokens: int = 1024) -> str:
        """Return the model's text completion for a single user prompt."""
