"""OpenAI implementation of the LLM client interface."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from nutrition_nl2sql.llm.base import LLMClient, LLMError


@dataclass(frozen=True)
class OpenAIAdapter(LLMClient):
    """Complete prompts using the OpenAI Chat Completions API."""

    api_key: str
    model: str
    base_url: str = "https://api.openai.com/v1"
    timeout_seconds: float = 60.0
    transport: httpx.AsyncBaseTransport | None = None

    async def complete(self, prompt: str, *, max_tokens: int = 1024) -> str:
        body = {
            "model": self.model,
            "max_completion_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        endpoint = self.base_url.rstrip("/") + "/chat/completions"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport
            ) as client:
                response = await client.post(
                    endpoint,
                    json=body,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise LLMError(
                f"OpenAI request failed with HTTP {exc.response.status_code}: "
                f"{exc.response.text}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise LLMError("OpenAI request timed out.") from exc
        except httpx.HTTPError as exc:
            raise LLMError(f"OpenAI request failed: {exc}") from exc
        except ValueError as exc:
            raise LLMError("OpenAI response was not valid JSON.") from exc

        return self._extract_message_content(payload)

    @staticmethod
    def _extract_message_content(payload: object) -> str:
        if not isinstance(payload, dict):
            raise LLMError("OpenAI response has invalid format.")

        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise LLMError("OpenAI response is missing choices.")

        first = choices[0]
        if not isinstance(first, dict):
            raise LLMError("OpenAI response has invalid choice format.")

        message = first.get("message")
        if not isinstance(message, dict):
            raise LLMError("OpenAI response is missing message content.")

        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise LLMError("OpenAI message content is empty.")
        return content
