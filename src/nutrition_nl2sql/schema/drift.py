"""Compare the static schema descriptor against live database columns."""

from __future__ import annotations

from nutrition_nl2sql.schema.descriptor import SchemaDescriptor


def find_schema_drift(
    descriptor: SchemaDescriptor,
    live_columns: dict[str, set[str]],
) -> list[str]:
    """Return one message per relation or column missing from the live database.

    Columns present in the database but absent from the descriptor are not
    drift: the descriptor only needs to be a truthful subset.
    """
    problems: list[str] = []
    for relation in descriptor.relations:
        present = live_columns.get(relation.name)
        if present is None:
            problems.append(f"Relation '{relation.name}' is missing from the database.")
            continue
        for column_name in relation.column_names:
            if column_name not in present:
                problems.append(
                    f"Column '{relation.name}.{column_name}' is missing from the database."
                )
    return problems
