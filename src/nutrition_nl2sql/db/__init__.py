"""Database helpers for nutrition-nl2sql."""

from nutrition_nl2sql.db.base import Database, DatabaseError, QueryError
from nutrition_nl2sql.db.connection import (
    DatabaseConnectionError,
    HealthcheckResult,
    PostgresDatabase,
    check_postgres_health,
    connect_readonly,
)
from nutrition_nl2sql.db.introspect import IntrospectionError, introspect_columns

__all__ = [
    "Database",
    "DatabaseConnectionError",
    "DatabaseError",
    "HealthcheckResult",
    "IntrospectionError",
    "PostgresDatabase",
    "QueryError",
    "check_postgres_health",
    "connect_readonly",
    "introspect_columns",
]
