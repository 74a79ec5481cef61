"""Typed records shared across the query pipeline."""

from nutrition_nl2sql.models.answers import (
    FallbackSignal,
    FormattedAnswer,
    FreeTextAnswer,
    PipelineOutcome,
    ValidationFailure,
)
from nutrition_nl2sql.models.generation import (
    CandidateQuery,
    ResultSet,
    ValidationVerdict,
)

__all__ = [
    "CandidateQuery",
    "FallbackSignal",
    "FormattedAnswer",
    "FreeTextAnswer",
    "PipelineOutcome",
    "ResultSet",
    "ValidationFailure",
    "ValidationVerdict",
]
