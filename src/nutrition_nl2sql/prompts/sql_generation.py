"""Prompt builder for NL-to-SQL generation requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from nutrition_nl2sql.schema.descriptor import SchemaDescriptor


class PromptBuildError(RuntimeError):
    """Raised when SQL generation prompt building cannot proceed safely."""


@dataclass(frozen=True)
class WorkedExample:
    question: str
    sql: str


SQL_RULES: tuple[str, ...] = (
    "Only SELECT queries (no INSERT, UPDATE, DELETE)",
    "Use ILIKE with % for fuzzy food name matching",
    "For year ranges: date >= '2025-01-01' AND date < '2026-01-01'",
    'For "how many times" → COUNT(DISTINCT date) for days, COUNT(*) for entries',
    'For "how much" → SUM(column)',
    "Return ONLY the SQL query, no explanation, no markdown",
)

SQL_EXAMPLES: tuple[WorkedExample, ...] = (
    WorkedExample(
        question="How many times did I drink gin last year?",
        sql=(
            "SELECT COUNT(DISTINCT date) as days, COUNT(*) as entries "
            "FROM food_entries WHERE food_name ILIKE '%gin%' "
            "AND NOT food_name ILIKE '%ginger%' "
            "AND date >= '2025-01-01' AND date < '2026-01-01';"
        ),
    ),
    WorkedExample(
        question="Total protein in January 2026?",
        sql=(
            "SELECT SUM(protein_g) as total_protein FROM daily_nutrition "
            "WHERE date >= '2026-01-01' AND date < '2026-02-01';"
        ),
    ),
    WorkedExample(
        question="How many beers did I have in 2025?",
        sql=(
            "SELECT COUNT(DISTINCT date) as days, COUNT(*) as entries "
            "FROM food_entries WHERE (food_name ILIKE '%beer%' "
            "OR food_name ILIKE '%lager%' OR food_name ILIKE '%ipa%' "
            "OR food_name ILIKE '%ale%') "
            "AND date >= '2025-01-01' AND date < '2026-01-01';"
        ),
    ),
    WorkedExample(
        question="Show me all gin entries",
        sql=(
            "SELECT date, food_name, calories FROM food_entries "
            "WHERE food_name ILIKE '%gin%' AND NOT food_name ILIKE '%ginger%' "
            "ORDER BY date DESC LIMIT 50;"
        ),
    ),
)


def build_sql_generation_prompt(
    question: str,
    schema: SchemaDescriptor,
    *,
    today: date | None = None,
    rules: tuple[str, ...] = SQL_RULES,
    examples: tuple[WorkedExample, ...] = SQL_EXAMPLES,
) -> str:
    """Build the fixed instructional prompt for a single question."""
    normalized_question = question.strip()
    if not normalized_question:
        raise PromptBuildError("Question cannot be empty.")

    current = today or date.today()
    rules_text = "\n".join(f"{index}. {rule}" for index, rule in enumerate(rules, 1))
    examples_text = "\n\n".join(f"Q: {item.question}\n{item.sql}" for item in examples)

    return (
        "You are a SQL query generator for a nutrition database. "
        "Generate a PostgreSQL query for the user's question.\n\n"
        f"SCHEMA:\n{schema.to_prompt_text()}\n\n"
        f"RULES:\n{rules_text}\n\n"
        f"EXAMPLES:\n{examples_text}\n\n"
        f"TODAY: {current.isoformat()}\n\n"
        f"USER QUESTION: {normalized_question}\n"
        "SQL:"
    )
