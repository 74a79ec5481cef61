"""SQL parsing helpers backed by SQLGlot, used for diagnostics only."""

from __future__ import annotations

from sqlglot import exp, parse_one
from sqlglot.errors import ParseError


class SQLParseError(RuntimeError):
    """Raised when SQL cannot be parsed."""


def parse_postgres_sql(sql: str) -> exp.Expression:
    """Parse a SQL statement using PostgreSQL dialect semantics."""
    normalized = sql.strip()
    if not normalized:
        raise SQLParseError("SQL cannot be empty.")

    try:
        return parse_one(normalized, read="postgres")
    except ParseError as exc:
        raise SQLParseError(f"Invalid SQL: {exc}") from exc


def referenced_tables(sql: str) -> list[str]:
    """List table names the statement reads from, excluding CTE aliases.

    This never feeds the validator's verdict; it only helps a human see what
    a generated query touches.
    """
    expression = parse_postgres_sql(sql)
    cte_names = {cte.alias_or_name for cte in expression.find_all(exp.CTE)}
    names = {
        table.name
        for table in expression.find_all(exp.Table)
        if table.name and table.name not in cte_names
    }
    return sorted(names)
