"""Fail-closed lexical gate between generated SQL and the database.

The checks are substring matches on a lower-cased copy of the query, not a
parse. An obfuscated statement can in principle slip past them, and harmless
identifiers that contain a blocked token (``created_at``, ``updated``) are
rejected. Both behaviours are accepted limitations; new dangerous keywords
belong in :data:`nutrition_nl2sql.sql.rules.BLOCKED_TOKENS`.
"""

from __future__ import annotations

from nutrition_nl2sql.models.generation import CandidateQuery, ValidationVerdict
from nutrition_nl2sql.schema.descriptor import NUTRITION_SCHEMA, SchemaDescriptor
from nutrition_nl2sql.sql.rules import (
    BLOCKED_TOKEN_REASON,
    BLOCKED_TOKENS,
    READ_ONLY_PREFIX,
    READ_ONLY_REASON,
    UNKNOWN_RELATION_REASON,
)


class SQLValidationError(RuntimeError):
    """Raised when SQL fails validation guardrails."""

    def __init__(self, reason: str, sql: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.sql = sql


def validate_sql(
    sql: str,
    schema: SchemaDescriptor = NUTRITION_SCHEMA,
) -> ValidationVerdict:
    """Check SQL text against the read-only, denylist and relation rules."""
    normalized = sql.strip().lower()

    if not normalized.startswith(READ_ONLY_PREFIX):
        return ValidationVerdict.reject(READ_ONLY_REASON)

    for token in BLOCKED_TOKENS:
        if token in normalized:
            return ValidationVerdict.reject(BLOCKED_TOKEN_REASON.format(token=token))

    if not any(name in normalized for name in schema.relation_names):
        return ValidationVerdict.reject(UNKNOWN_RELATION_REASON)

    return ValidationVerdict.accept()


def validate_candidate(
    candidate: CandidateQuery,
    schema: SchemaDescriptor = NUTRITION_SCHEMA,
) -> ValidationVerdict:
    """Validate a generated candidate query."""
    return validate_sql(candidate.sql, schema)


def ensure_valid_sql(
    sql: str,
    schema: SchemaDescriptor = NUTRITION_SCHEMA,
) -> ValidationVerdict:
    """Validate SQL and raise when it is rejected."""
    verdict = validate_sql(sql, schema)
    if not verdict.accepted:
        assert verdict.reason is not None
        raise SQLValidationError(verdict.reason, sql)
    return verdict
