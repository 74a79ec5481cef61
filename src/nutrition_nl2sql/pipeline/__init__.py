"""Classify, generate, validate, execute and format pipeline."""

from nutrition_nl2sql.pipeline.classifier import (
    AGGREGATION_PATTERNS,
    is_aggregation_question,
)
from nutrition_nl2sql.pipeline.executor import ExecutionError, QueryExecutor
from nutrition_nl2sql.pipeline.formatter import (
    AggregateResult,
    EmptyResult,
    ListingResult,
    classify_result_shape,
    format_answer,
    format_date,
)
from nutrition_nl2sql.pipeline.free_text import DateRange, FreeTextAnswerer
from nutrition_nl2sql.pipeline.generator import (
    GenerationError,
    SQLGenerator,
    normalize_completion,
)
from nutrition_nl2sql.pipeline.orchestrator import QueryPipeline

__all__ = [
    "AGGREGATION_PATTERNS",
    "AggregateResult",
    "DateRange",
    "EmptyResult",
    "ExecutionError",
    "FreeTextAnswerer",
    "GenerationError",
    "ListingResult",
    "QueryExecutor",
    "QueryPipeline",
    "SQLGenerator",
    "classify_result_shape",
    "format_answer",
    "format_date",
    "is_aggregation_question",
    "normalize_completion",
]
