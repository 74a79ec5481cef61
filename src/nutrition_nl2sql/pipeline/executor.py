"""Run validated SQL against the database collaborator."""

from __future__ import annotations

import logging
import time

from nutrition_nl2sql.db.base import Database, DatabaseError
from nutrition_nl2sql.models.generation import CandidateQuery, ResultSet

logger = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    """Raised when the database rejects or fails an already-validated query."""

    def __init__(self, message: str, sql: str) -> None:
        super().__init__(message)
        self.sql = sql


class QueryExecutor:
    """Time and run a query. Callers must validate the query first."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def execute(self, candidate: CandidateQuery) -> ResultSet:
        started = time.perf_counter()
        try:
            rows = await self._database.execute(candidate.sql)
        except DatabaseError as exc:
            raise ExecutionError(str(exc), candidate.sql) from exc
        except TimeoutError as exc:
            raise ExecutionError("Query timed out.", candidate.sql) from exc
        elapsed_ms = round((time.perf_counter() - started) * 1000)

        logger.info(f"Query returned {len(rows)} row(s) in {elapsed_ms} ms")
        return ResultSet(rows=list(rows), execution_time_ms=elapsed_ms)
