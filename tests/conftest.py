from __future__ import annotations

from datetime import date
from typing import Any

import pytest

from nutrition_nl2sql.db.base import Database, QueryError
from nutrition_nl2sql.llm.base import LLMClient, LLMError


class FakeLLM(LLMClient):
    """Returns a canned completion, or raises a canned error."""

    def __init__(self, completion: str = "", error: Exception | None = None) -> None:
        self.completion = completion
        self.error = error
        self.prompts: list[str] = []
        self.max_tokens: list[int] = []

    async def complete(self, prompt: str, *, max_tokens: int = 1024) -> str:
        self.prompts.append(prompt)
        self.max_tokens.append(max_tokens)
        if self.error is not None:
            raise self.error
        return self.completion


class FakeDatabase(Database):
    """Answers queries from a list of canned results, in call order."""

    def __init__(
        self,
        results: list[list[dict[str, Any]]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.results = list(results or [])
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    async def execute(self, query: str, params: Any = None) -> list[dict[str, Any]]:
        self.calls.append((query, params))
        if self.error is not None:
            raise self.error
        if not self.results:
            return []
        return self.results.pop(0)


def fixed_today() -> date:
    return date(2026, 2, 15)


@pytest.fixture
def fake_llm_factory():
    def _factory(completion: str = "", error: Exception | None = None) -> FakeLLM:
        return FakeLLM(completion=completion, error=error)

    return _factory


@pytest.fixture
def fake_db_factory():
    def _factory(
        results: list[list[dict[str, Any]]] | None = None,
        error: Exception | None = None,
    ) -> FakeDatabase:
        return FakeDatabase(results=results, error=error)

    return _factory


@pytest.fixture
def llm_error() -> LLMError:
    return LLMError("Anthropic request timed out.")


@pytest.fixture
def query_error() -> QueryError:
    return QueryError('column "food" does not exist')
