"""Compose classify, generate, validate, execute and format into one answer."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from nutrition_nl2sql.db.base import Database
from nutrition_nl2sql.llm.base import LLMClient
from nutrition_nl2sql.models.answers import (
    FallbackSignal,
    PipelineOutcome,
    ValidationFailure,
)
from nutrition_nl2sql.pipeline.classifier import is_aggregation_question
from nutrition_nl2sql.pipeline.executor import ExecutionError, QueryExecutor
from nutrition_nl2sql.pipeline.formatter import format_answer
from nutrition_nl2sql.pipeline.generator import (
    DEFAULT_GENERATION_MAX_TOKENS,
    GenerationError,
    SQLGenerator,
)
from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA, SchemaDescriptor
from nutrition_nl2sql.sql.validator import validate_candidate

logger = logging.getLogger(__name__)


class QueryPipeline:
    """Answer aggregation questions with validated, LLM-generated SQL.

    Each call is independent. A candidate query reaches the database only
    after the validator accepts it, and nothing is retried: a rejected or
    failed query is surfaced to the caller once.
    """

    def __init__(
        self,
        llm: LLMClient,
        database: Database,
        schema: SchemaDescriptor = NUTRITION_SCHEMA,
        *,
        generation_max_tokens: int = DEFAULT_GENERATION_MAX_TOKENS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._schema = schema
        self._generator = SQLGenerator(
            llm, schema, max_tokens=generation_max_tokens, today=today
        )
        self._executor = QueryExecutor(database)

    async def answer(self, question: str) -> PipelineOutcome:
        """Return a formatted answer, a fallback signal or a validation failure.

        Raises:
            GenerationError: the LLM was unreachable or returned nothing usable.
            ExecutionError: the database failed on an accepted query.
        """
        if not is_aggregation_question(question):
            logger.info("Question is not an aggregation; routing to free-text answering")
            return FallbackSignal(question=question)

        try:
            candidate = await self._generator.generate(question)
        except GenerationError as exc:
            logger.error(f"SQL generation failed: {exc}")
            raise

        verdict = validate_candidate(candidate, self._schema)
        if not verdict.accepted:
            assert verdict.reason is not None
            logger.warning(f"Generated SQL rejected ({verdict.reason}): {candidate.sql}")
            return ValidationFailure(
                question=question,
                reason=verdict.reason,
                sql=candidate.sql,
            )

        try:
            result = await self._executor.execute(candidate)
        except ExecutionError as exc:
            logger.error(f"Query execution failed: {exc}")
            raise

        return format_answer(question, candidate.sql, result)
