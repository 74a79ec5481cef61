"""Internal records passed between generation, validation and execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class CandidateQuery:
    """LLM-generated SQL. Untrusted until it carries an accepted verdict."""

    sql: str
    question: str
    generated_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class ValidationVerdict:
    accepted: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> ValidationVerdict:
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: str) -> ValidationVerdict:
        return cls(accepted=False, reason=reason)


@dataclass(frozen=True)
class ResultSet:
    """Rows returned by one execution, in database order."""

    rows: list[dict[str, Any]]
    execution_time_ms: int

    @property
    def row_count(self) -> int:
        return len(self.rows)
