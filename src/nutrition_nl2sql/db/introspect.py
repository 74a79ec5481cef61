"""Live column introspection for the relations the descriptor names."""

from __future__ import annotations

from nutrition_nl2sql.db.base import Database, DatabaseError
from nutrition_nl2sql.db.queries import COLUMNS_QUERY
from nutrition_nl2sql.schema.descriptor import SchemaDescriptor


class IntrospectionError(RuntimeError):
    """Raised when schema introspection fails."""


async def introspect_columns(
    database: Database,
    descriptor: SchemaDescriptor,
    schema_name: str = "public",
) -> dict[str, set[str]]:
    """Map each described relation that exists in the database to its columns."""
    try:
        rows = await database.execute(
            COLUMNS_QUERY,
            {"schema": schema_name, "tables": list(descriptor.relation_names)},
        )
    except DatabaseError as exc:
        raise IntrospectionError(str(exc)) from exc

    columns: dict[str, set[str]] = {}
    for row in rows:
        columns.setdefault(row["table_name"], set()).add(row["column_name"])
    return columns
