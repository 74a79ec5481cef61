"""Free-text answering for questions the classifier does not route to SQL.

No generated SQL is involved here: the log summary comes from fixed,
parameterized queries and the LLM only writes prose.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from nutrition_nl2sql.db.base import Database, DatabaseError, QueryParams
from nutrition_nl2sql.db.queries import (
    RANGE_STATS_QUERY,
    RECENT_FOODS_QUERY,
    UNIQUE_FOODS_QUERY,
)
from nutrition_nl2sql.llm.base import LLMClient, LLMError
from nutrition_nl2sql.models.answers import FreeTextAnswer
from nutrition_nl2sql.pipeline.executor import ExecutionError
from nutrition_nl2sql.pipeline.formatter import normalize_row
from nutrition_nl2sql.pipeline.generator import GenerationError
from nutrition_nl2sql.prompts.free_text import (
    DetailLevel,
    NutritionContext,
    build_free_text_prompt,
)
from nutrition_nl2sql.prompts.sql_generation import PromptBuildError

logger = logging.getLogger(__name__)

DEFAULT_RANGE_START = date(2021, 1, 1)
DEFAULT_ANSWER_MAX_TOKENS = 1024


@dataclass(frozen=True)
class DateRange:
    start: date | None = None
    end: date | None = None


class FreeTextAnswerer:
    """Answer open questions from a summary of the nutrition log."""

    def __init__(
        self,
        llm: LLMClient,
        database: Database,
        *,
        max_tokens: int = DEFAULT_ANSWER_MAX_TOKENS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._llm = llm
        self._database = database
        self._max_tokens = max_tokens
        self._today = today

    async def _query(self, sql: str, params: QueryParams) -> list[dict]:
        try:
            return await self._database.execute(sql, params)
        except DatabaseError as exc:
            raise ExecutionError(str(exc), sql) from exc

    async def load_context(self, date_range: DateRange | None = None) -> NutritionContext:
        """Collect range averages, recent foods and distinct food names."""
        date_range = date_range or DateRange()
        params = {
            "start": date_range.start or DEFAULT_RANGE_START,
            "end": date_range.end or self._today(),
        }

        stats_rows = await self._query(RANGE_STATS_QUERY, params)
        recent_rows = await self._query(RECENT_FOODS_QUERY, params)
        unique_rows = await self._query(UNIQUE_FOODS_QUERY, params)

        return NutritionContext(
            start=date_range.start.isoformat() if date_range.start else None,
            end=date_range.end.isoformat() if date_range.end else None,
            stats=normalize_row(stats_rows[0]) if stats_rows else {},
            unique_foods=[row["food_name"] for row in unique_rows],
            recent_foods=[normalize_row(row) for row in recent_rows],
        )

    async def answer(
        self,
        question: str,
        date_range: DateRange | None = None,
        *,
        detail_level: DetailLevel = "medium",
        with_humour: bool = False,
    ) -> FreeTextAnswer:
        context = await self.load_context(date_range)
        try:
            prompt = build_free_text_prompt(
                question,
                context,
                detail_level=detail_level,
                with_humour=with_humour,
            )
        except PromptBuildError as exc:
            raise GenerationError(str(exc)) from exc

        try:
            text = await self._llm.complete(prompt, max_tokens=self._max_tokens)
        except LLMError as exc:
            logger.error(f"Free-text answer failed: {exc}")
            raise GenerationError(f"Free-text answer failed: {exc}") from exc

        return FreeTextAnswer(question=question, answer=text.strip())
