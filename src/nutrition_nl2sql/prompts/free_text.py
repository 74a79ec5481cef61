"""Prompt builder for free-text answers to non-aggregation questions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from nutrition_nl2sql.prompts.sql_generation import PromptBuildError

DetailLevel = Literal["low", "medium", "high"]

DETAIL_INSTRUCTIONS: dict[str, str] = {
    "low": "Be very brief. 2-3 sentences max.",
    "medium": "Give a balanced answer. Under 150 words.",
    "high": "Provide comprehensive analysis with examples.",
}

HUMOUR_INSTRUCTION = (
    "TONE: Add a dash of humour, be witty, throw in a food pun or playful "
    "observation. Keep it light and fun while still being helpful."
)


@dataclass(frozen=True)
class NutritionContext:
    """Log summary embedded in the free-text prompt."""

    start: str | None
    end: str | None
    stats: dict[str, Any]
    unique_foods: list[str] = field(default_factory=list)
    recent_foods: list[dict[str, Any]] = field(default_factory=list)


def build_free_text_prompt(
    question: str,
    context: NutritionContext,
    *,
    detail_level: DetailLevel = "medium",
    with_humour: bool = False,
) -> str:
    normalized_question = question.strip()
    if not normalized_question:
        raise PromptBuildError("Question cannot be empty.")
    if detail_level not in DETAIL_INSTRUCTIONS:
        raise PromptBuildError(f"Unknown detail level: {detail_level!r}.")

    header = "You are a personal nutrition assistant. Answer this nutrition question."
    if with_humour:
        header += f"\n\n{HUMOUR_INSTRUCTION}"

    stats = context.stats
    averages = (
        f"{stats.get('avg_calories')} cal/day, {stats.get('avg_protein')}g protein, "
        f"{stats.get('avg_carbs')}g carbs, {stats.get('avg_fat')}g fat"
    )
    recent = "\n".join(
        f"{item.get('date')}: {item.get('food_name')}" for item in context.recent_foods
    )

    return (
        f"{header}\n\n"
        f"{DETAIL_INSTRUCTIONS[detail_level]}\n\n"
        f"Date range: {context.start or 'all'} to {context.end or 'now'}\n"
        f"Days logged: {stats.get('days_logged', 0)}\n"
        f"Averages: {averages}\n\n"
        f"=== UNIQUE FOODS ({len(context.unique_foods)} items) ===\n"
        f"{', '.join(context.unique_foods)}\n\n"
        f"=== RECENT FOODS ===\n"
        f"{recent}\n\n"
        f"Question: {normalized_question}"
    )
