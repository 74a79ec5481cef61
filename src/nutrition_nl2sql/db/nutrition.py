"""Raw daily nutrition listing."""

from __future__ import annotations

from datetime import date
from typing import Any

from nutrition_nl2sql.db.base import Database
from nutrition_nl2sql.db.queries import (
    DAILY_NUTRITION_QUERY,
    DAILY_NUTRITION_RANGE_QUERY,
)
from nutrition_nl2sql.pipeline.formatter import normalize_row


async def fetch_daily_nutrition(
    database: Database,
    start: date | None = None,
    end: date | None = None,
) -> list[dict[str, Any]]:
    """Return daily totals ordered by date, limited to [start, end] when both are set."""
    if start is not None and end is not None:
        rows = await database.execute(
            DAILY_NUTRITION_RANGE_QUERY, {"start": start, "end": end}
        )
    else:
        rows = await database.execute(DAILY_NUTRITION_QUERY)
    return [normalize_row(row) for row in rows]
