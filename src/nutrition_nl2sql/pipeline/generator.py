"""Turn a natural-language question into a candidate SQL string."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable

from nutrition_nl2sql.llm.base import LLMClient, LLMError
from nutrition_nl2sql.models.generation import CandidateQuery
from nutrition_nl2sql.prompts.sql_generation import (
    PromptBuildError,
    build_sql_generation_prompt,
)
from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA, SchemaDescriptor

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:sql)?", re.IGNORECASE)

DEFAULT_GENERATION_MAX_TOKENS = 500


class GenerationError(RuntimeError):
    """Raised when the LLM cannot produce a usable candidate query."""


def normalize_completion(text: str) -> str:
    """Strip code fences, whitespace and one trailing statement terminator."""
    sql = _CODE_FENCE.sub("", text).strip()
    if sql.endswith(";"):
        sql = sql[:-1].rstrip()
    return sql


class SQLGenerator:
    """Generate candidate SQL with a single, unretried LLM call."""

    def __init__(
        self,
        llm: LLMClient,
        schema: SchemaDescriptor = NUTRITION_SCHEMA,
        *,
        max_tokens: int = DEFAULT_GENERATION_MAX_TOKENS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._llm = llm
        self._schema = schema
        self._max_tokens = max_tokens
        self._today = today

    async def generate(self, question: str) -> CandidateQuery:
        try:
            prompt = build_sql_generation_prompt(
                question, self._schema, today=self._today()
            )
        except PromptBuildError as exc:
            raise GenerationError(str(exc)) from exc

        try:
            completion = await self._llm.complete(prompt, max_tokens=self._max_tokens)
        except LLMError as exc:
            raise GenerationError(f"SQL generation failed: {exc}") from exc
        except TimeoutError as exc:
            raise GenerationError("SQL generation timed out.") from exc

        sql = normalize_completion(completion)
        if not sql:
            raise GenerationError("LLM returned an empty completion.")

        logger.debug(f"Generated SQL for {question!r}: {sql}")
        return CandidateQuery(sql=sql, question=question)
