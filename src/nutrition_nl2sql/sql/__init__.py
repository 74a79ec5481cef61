"""SQL parsing and validation utilities."""

from nutrition_nl2sql.sql.parser import (
    SQLParseError,
    parse_postgres_sql,
    referenced_tables,
)
from nutrition_nl2sql.sql.validator import (
    SQLValidationError,
    ensure_valid_sql,
    validate_candidate,
    validate_sql,
)

__all__ = [
    "SQLParseError",
    "parse_postgres_sql",
    "referenced_tables",
    "SQLValidationError",
    "ensure_valid_sql",
    "validate_candidate",
    "validate_sql",
]
