"""Lexical safety rules for validating generated SQL."""

from __future__ import annotations

READ_ONLY_PREFIX = "select"

# Scanned in order; the first hit names the rejection.
BLOCKED_TOKENS: tuple[str, ...] = (
    "insert",
    "update",
    "delete",
    "drop",
    "alter",
    "create",
    "truncate",
    "grant",
    "revoke",
    ";--",
    "union",
)

READ_ONLY_REASON = "only read queries allowed."
BLOCKED_TOKEN_REASON = "blocked keyword: {token}"
UNKNOWN_RELATION_REASON = "must reference an allowed relation."
