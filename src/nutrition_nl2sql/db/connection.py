"""PostgreSQL connection, health check and query utilities."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

import psycopg
from psycopg.rows import dict_row

from nutrition_nl2sql.db.base import Database, DatabaseError, QueryError, QueryParams


class DatabaseConnectionError(DatabaseError):
    """Raised when a PostgreSQL connection or health check fails."""


@dataclass(frozen=True)
class HealthcheckResult:
    """Information returned by a successful PostgreSQL health check."""

    current_database: str
    current_user: str
    server_version: str
    transaction_read_only: bool


@asynccontextmanager
async def connect_readonly(
    postgres_dsn: str,
) -> AsyncIterator[psycopg.AsyncConnection[dict[str, Any]]]:
    """Open a PostgreSQL connection configured as read-only by default."""
    try:
        conn = await psycopg.AsyncConnection.connect(
            postgres_dsn,
            connect_timeout=5,
            options="-c default_transaction_read_only=on",
            row_factory=dict_row,
        )
    except psycopg.Error as exc:
        raise DatabaseConnectionError(
            f"Could not connect to PostgreSQL with provided DSN: {exc}"
        ) from exc

    async with conn:
        yield conn


@dataclass(frozen=True)
class PostgresDatabase(Database):
    """Database collaborator backed by one read-only connection per statement."""

    postgres_dsn: str

    async def execute(
        self, query: str, params: QueryParams = None
    ) -> list[dict[str, Any]]:
        # With params=None psycopg leaves '%' untouched, so literal
        # ILIKE '%gin%' patterns in generated SQL survive.
        try:
            async with connect_readonly(self.postgres_dsn) as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, params)
                    if cur.description is None:
                        return []
                    rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise QueryError(str(exc).strip()) from exc
        return [dict(row) for row in rows]


async def check_postgres_health(postgres_dsn: str) -> HealthcheckResult:
    """Run a lightweight database health check and verify read-only mode."""
    try:
        async with connect_readonly(postgres_dsn) as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    SELECT
                      current_database() AS current_database,
                      current_user AS current_user,
                      current_setting('server_version') AS server_version,
                      current_setting('transaction_read_only') AS read_only
                    """
                )
                row = await cur.fetchone()
    except DatabaseConnectionError:
        raise
    except psycopg.Error as exc:
        raise DatabaseConnectionError(f"PostgreSQL health check failed: {exc}") from exc

    if row is None:
        raise DatabaseConnectionError("PostgreSQL health check returned no data.")

    transaction_read_only = row["read_only"] == "on"
    if not transaction_read_only:
        raise DatabaseConnectionError(
            "Connected successfully but session is not read-only."
        )

    return HealthcheckResult(
        current_database=row["current_database"],
        current_user=row["current_user"],
        server_version=row["server_version"],
        transaction_read_only=transaction_read_only,
    )
