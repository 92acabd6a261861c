"""Data models and type definitions."""

from dataclasses import dataclass, field
from typing import Any

from sqlite_datagen.providers.base import ValueProvider, as_provider


@dataclass(frozen=True)
class FieldDefinition:
    """
    One column (or bare DDL clause) of a table definition.

    Attributes:
        type: SQL type/constraint clause, placed verbatim in DDL
        name: Column name; None for clauses like "PRIMARY KEY (a, b)"
        generator: Value provider or no-argument callable (sync or async).
            Fields without one always insert NULL.
    """

    type: str
    name: str | None = None
    generator: Any = None

    @property
    def provider(self) -> ValueProvider | None:
        """Get the generator as a ValueProvider (None if field has none)."""
        return as_provider(self.generator)

    @property
    def ddl_clause(self) -> str:
        """
        Render the field for CREATE TABLE.

        Returns:
            "<name> <type>" for named fields, "<type>" otherwise
        """
        if self.name:
            return f"{self.name} {self.type}"
        return self.type


@dataclass(frozen=True)
class TableDefinition:
    """
    Schema plus row count for one generated table.

    Attributes:
        name: Table name
        fields: Field definitions in declaration order
        num_rows: Number of example rows to insert

    Raises:
        ValueError: If num_rows is negative
    """

    name: str
    fields: list[FieldDefinition] = field(default_factory=list)
    num_rows: int = 0

    def __post_init__(self):
        if self.num_rows < 0:
            raise ValueError(
                f"num_rows must be non-negative for table '{self.name}', "
                f"got {self.num_rows}"
            )

    @property
    def named_fields(self) -> list[FieldDefinition]:
        """Fields that receive INSERT values, in declared order."""
        return [f for f in self.fields if f.name]

    @property
    def columns(self) -> list[str]:
        """Column names used in the INSERT column list."""
        return [f.name for f in self.named_fields]
