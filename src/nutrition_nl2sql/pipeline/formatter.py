"""Render query results as deterministic, human-readable answers.

Rows are first classified into one of three shapes, each with its own
renderer:

- ``EmptyResult``: no rows.
- ``AggregateResult``: a single row carrying count or total fields.
- ``ListingResult``: anything else, rendered as bullet lines.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from nutrition_nl2sql.models.answers import FormattedAnswer
from nutrition_nl2sql.models.generation import ResultSet

EMPTY_MESSAGE = "no matching entries found."
LISTING_LIMIT = 20

COUNT_FIELDS = ("days", "entries", "count")
TOTAL_FIELDS = ("total", "total_protein", "total_calories")
AGGREGATE_FIELDS = COUNT_FIELDS + TOTAL_FIELDS


@dataclass(frozen=True)
class EmptyResult:
    pass


@dataclass(frozen=True)
class AggregateResult:
    row: dict[str, Any]


@dataclass(frozen=True)
class ListingResult:
    rows: list[dict[str, Any]]


ResultShape = EmptyResult | AggregateResult | ListingResult


def classify_result_shape(rows: list[dict[str, Any]]) -> ResultShape:
    """Decide which renderer applies to a result set."""
    if not rows:
        return EmptyResult()
    if len(rows) == 1 and any(name in rows[0] for name in AGGREGATE_FIELDS):
        return AggregateResult(row=rows[0])
    return ListingResult(rows=rows)


def format_date(value: object) -> str:
    """Render date objects and ISO date strings as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split("T")[0]


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    """Make a row JSON-friendly: dates as YYYY-MM-DD, decimals as floats."""
    normalized: dict[str, Any] = {}
    for key, value in row.items():
        if isinstance(value, date) or (key == "date" and isinstance(value, str)):
            normalized[key] = format_date(value)
        elif isinstance(value, Decimal):
            normalized[key] = float(value)
        else:
            normalized[key] = value
    return normalized


def _format_number(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, int):
        return str(value)
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"


def _round_half_up(value: object) -> str:
    try:
        rounded = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return str(value)
    return str(int(rounded))


def _is_one(value: object) -> bool:
    return _format_number(value) == "1"


def _format_value(key: str, value: object) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, date) or key == "date":
        return format_date(value)
    return _format_number(value)


def _render_pairs(row: dict[str, Any]) -> str:
    return ", ".join(f"{key}: {_format_value(key, value)}" for key, value in row.items())


def _render_aggregate(row: dict[str, Any]) -> str:
    days = row.get("days")
    entries = row.get("entries")
    parts: list[str] = []

    if entries is not None:
        noun = "entry" if _is_one(entries) else "entries"
        sentence = f"Found {_format_number(entries)} {noun}"
        if days is not None:
            day_noun = "day" if _is_one(days) else "days"
            sentence += f" across {_format_number(days)} different {day_noun}"
        parts.append(sentence + ".")
    elif days is not None:
        day_noun = "day" if _is_one(days) else "days"
        parts.append(f"Found entries on {_format_number(days)} different {day_noun}.")

    if row.get("count") is not None:
        parts.append(f"Count: {_format_number(row['count'])}.")
    if row.get("total") is not None:
        parts.append(f"Total quantity: {_round_half_up(row['total'])}.")
    if row.get("total_protein") is not None:
        parts.append(f"Total protein: {_round_half_up(row['total_protein'])}g.")
    if row.get("total_calories") is not None:
        parts.append(f"Total calories: {_round_half_up(row['total_calories'])}.")

    if not parts:
        return _render_pairs(row)
    return " ".join(parts)


def _render_listing_line(row: dict[str, Any]) -> str:
    label = row.get("food_name")
    if row.get("date") is None or label is None:
        return f"• {_render_pairs(row)}"
    line = f"• {format_date(row['date'])}: {label}"
    if row.get("calories") is not None:
        line += f" ({_format_number(row['calories'])} cal)"
    return line


def _render_listing(rows: list[dict[str, Any]]) -> str:
    noun = "entry" if len(rows) == 1 else "entries"
    lines = [_render_listing_line(row) for row in rows[:LISTING_LIMIT]]
    text = f"Found {len(rows)} {noun}:\n\n" + "\n".join(lines)
    remaining = len(rows) - LISTING_LIMIT
    if remaining > 0:
        text += f"\n\n...and {remaining} more entries"
    return text


def render_result(shape: ResultShape) -> str:
    """Render a classified result shape as answer text."""
    if isinstance(shape, EmptyResult):
        return EMPTY_MESSAGE
    if isinstance(shape, AggregateResult):
        return _render_aggregate(shape.row)
    if isinstance(shape, ListingResult):
        return _render_listing(shape.rows)
    raise TypeError(f"Unsupported result shape: {shape!r}")


def format_answer(question: str, sql: str, result: ResultSet) -> FormattedAnswer:
    """Build the caller-facing answer for an executed query."""
    return FormattedAnswer(
        question=question,
        answer=render_result(classify_result_shape(result.rows)),
        sql=sql,
        row_count=result.row_count,
        execution_time_ms=result.execution_time_ms,
        rows=[normalize_row(row) for row in result.rows],
    )
