"""Static, versioned description of the queryable nutrition relations."""

from __future__ import annotations

from dataclasses import dataclass, field

SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    data_type: str

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "type": self.data_type}


@dataclass(frozen=True)
class RelationInfo:
    name: str
    columns: tuple[ColumnInfo, ...] = field(default_factory=tuple)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def to_prompt_line(self) -> str:
        rendered = ", ".join(
            f"{column.name} ({column.data_type})" for column in self.columns
        )
        return f"- {self.name}: {rendered}"

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class SchemaDescriptor:
    """Single source of truth for relations the generated SQL may mention."""

    version: str
    relations: tuple[RelationInfo, ...]

    @property
    def relation_names(self) -> tuple[str, ...]:
        return tuple(relation.name for relation in self.relations)

    def relation(self, name: str) -> RelationInfo | None:
        for relation in self.relations:
            if relation.name == name:
                return relation
        return None

    def to_prompt_text(self) -> str:
        """Render the descriptor verbatim for embedding in LLM prompts."""
        return "\n".join(relation.to_prompt_line() for relation in self.relations)

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version,
            "relations": [relation.to_dict() for relation in self.relations],
        }


def _columns(*pairs: tuple[str, str]) -> tuple[ColumnInfo, ...]:
    return tuple(ColumnInfo(name=name, data_type=data_type) for name, data_type in pairs)


NUTRITION_SCHEMA = SchemaDescriptor(
    version=SCHEMA_VERSION,
    relations=(
        RelationInfo(
            name="food_entries",
            columns=_columns(
                ("id", "INTEGER"),
                ("date", "DATE"),
                ("meal", "TEXT"),
                ("food_name", "TEXT"),
                ("quantity", "REAL"),
                ("unit", "TEXT"),
                ("calories", "REAL"),
                ("protein", "REAL"),
                ("carbs", "REAL"),
                ("fat", "REAL"),
                ("fiber", "REAL"),
                ("sugar", "REAL"),
                ("sodium", "REAL"),
            ),
        ),
        RelationInfo(
            name="daily_nutrition",
            columns=_columns(
                ("date", "DATE PRIMARY KEY"),
                ("calories", "REAL"),
                ("protein_g", "REAL"),
                ("carbs_g", "REAL"),
                ("fat_g", "REAL"),
                ("fiber_g", "REAL"),
                ("sugar_g", "REAL"),
                ("sodium_mg", "REAL"),
            ),
        ),
        RelationInfo(
            name="weight",
            columns=_columns(
                ("date", "DATE"),
                ("weight_kg", "REAL"),
            ),
        ),
    ),
)
