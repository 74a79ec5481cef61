"""Caller-facing answer records returned by the query pipeline."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class FormattedAnswer(BaseModel):
    """Structured SQL answer, including the exact query that was executed.

    ``rows`` is stored as a tuple of read-only mappings, so neither the field
    nor the rows it holds can change after construction.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    question: str
    answer: str
    sql: str
    row_count: int = Field(ge=0)
    execution_time_ms: int = Field(ge=0)
    method: Literal["sql"] = "sql"
    rows: tuple[Mapping[str, Any], ...] = ()

    @field_validator("rows")
    @classmethod
    def freeze_rows(cls, value: tuple[Mapping[str, Any], ...]) -> tuple[Mapping[str, Any], ...]:
        return tuple(MappingProxyType(dict(row)) for row in value)

    @field_serializer("rows")
    def serialize_rows(self, value: tuple[Mapping[str, Any], ...]) -> list[dict[str, Any]]:
        return [dict(row) for row in value]


class FallbackSignal(BaseModel):
    """Routing decision: the question belongs to free-text answering."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    question: str
    answer: str = "This question is better suited for the general free-text answering feature."
    suggestion: str = "Ask it through free-text answering instead."
    method: Literal["redirect"] = "redirect"


class ValidationFailure(BaseModel):
    """Generated SQL that was rejected and never executed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    question: str
    error: str = "Generated SQL failed validation"
    reason: str
    sql: str


class FreeTextAnswer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    question: str
    answer: str
    method: Literal["llm"] = "llm"


PipelineOutcome = FormattedAnswer | FallbackSignal | ValidationFailure
