"""Schema descriptor and drift helpers."""

from nutrition_nl2sql.schema.descriptor import (
    NUTRITION_SCHEMA,
    SCHEMA_VERSION,
    ColumnInfo,
    RelationInfo,
    SchemaDescriptor,
)
from nutrition_nl2sql.schema.drift import find_schema_drift

__all__ = [
    "NUTRITION_SCHEMA",
    "SCHEMA_VERSION",
    "ColumnInfo",
    "RelationInfo",
    "SchemaDescriptor",
    "find_schema_drift",
]
