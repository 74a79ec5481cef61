"""Prompt builders for nutrition-nl2sql."""

from nutrition_nl2sql.prompts.free_text import (
    DETAIL_INSTRUCTIONS,
    NutritionContext,
    build_free_text_prompt,
)
from nutrition_nl2sql.prompts.sql_generation import (
    SQL_EXAMPLES,
    SQL_RULES,
    PromptBuildError,
    WorkedExample,
    build_sql_generation_prompt,
)

__all__ = [
    "DETAIL_INSTRUCTIONS",
    "NutritionContext",
    "PromptBuildError",
    "SQL_EXAMPLES",
    "SQL_RULES",
    "WorkedExample",
    "build_free_text_prompt",
    "build_sql_generation_prompt",
]
