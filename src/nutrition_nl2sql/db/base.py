"""Provider-independent database collaborator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

QueryParams = Sequence[Any] | Mapping[str, Any] | None


class DatabaseError(RuntimeError):
    """Raised when the database collaborator cannot complete a request."""


class QueryError(DatabaseError):
    """Raised when the database rejects or fails a statement."""


class Database(ABC):
    """Read-only query capability with rows keyed by column name."""

    @abstractmethod
    async def execute(
        self, query: str, params: QueryParams = None
    ) -> list[dict[str, Any]]:
        """Run one statement and return its rows."""
