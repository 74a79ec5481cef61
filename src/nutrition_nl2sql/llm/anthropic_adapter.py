"""Anthropic implementation of the LLM client interface."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from nutrition_nl2sql.llm.base import LLMClient, LLMError

ANTHROPIC_VERSION = "2023-06-01"


@dataclass(frozen=True)
class AnthropicAdapter(LLMClient):
    """Complete prompts using the Anthropic Messages API."""

    api_key: str
    model: str
    base_url: str = "https://api.anthropic.com/v1"
    timeout_seconds: float = 60.0
    transport: httpx.AsyncBaseTransport | None = None

    async def complete(self, prompt: str, *, max_tokens: int = 1024) -> str:
        body = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        endpoint = self.base_url.rstrip("/") + "/messages"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    endpoint,
                    json=body,
                    headers={
                        "x-api-key": self.api_key,
                        "anthropic-version": ANTHROPIC_VERSION,
                    },
                )
                payload = response.json()
        except httpx.TimeoutException as exc:
            raise LLMError("Anthropic request timed out.") from exc
        except httpx.HTTPError as exc:
            raise LLMError(f"Anthropic request failed: {exc}") from exc
        except ValueError as exc:
            raise LLMError("Anthropic response was not valid JSON.") from exc

        # Error bodies carry a message worth surfacing verbatim.
        if isinstance(payload, dict) and payload.get("error"):
            error = payload["error"]
            message = error.get("message") if isinstance(error, dict) else None
            raise LLMError(f"Anthropic error: {message or error}")
        if response.is_error:
            raise LLMError(
                f"Anthropic request failed with HTTP {response.status_code}: {response.text}"
            )

        return self._extract_text(payload)

    @staticmethod
    def _extract_text(payload: object) -> str:
        if not isinstance(payload, dict):
            raise LLMError("Anthropic response has invalid format.")

        content = payload.get("content")
        if not isinstance(content, list) or not content:
            raise LLMError("Anthropic response is missing content.")

        first = content[0]
        if not isinstance(first, dict):
            raise LLMError("Anthropic response has invalid content block.")

        text = first.get("text")
        if not isinstance(text, str) or not text.strip():
            raise LLMError("Anthropic message content is empty.")
        return text
