"""Route counting and summing questions to structured SQL answering."""

from __future__ import annotations

import re

# Recall-biased: a false positive is bounded by the validator, a false
# negative only costs precision in the free-text path.
AGGREGATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"how many",
        r"how much",
        r"count",
        r"total",
        r"sum",
        r"average",
        r"avg",
        r"times did",
        r"days did",
        r"frequency",
        r"often",
        r"number of",
    )
)


def is_aggregation_question(question: str) -> bool:
    """Return True when the question asks for a count, sum or average."""
    normalized = question.casefold()
    return any(pattern.search(normalized) for pattern in AGGREGATION_PATTERNS)
