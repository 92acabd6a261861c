"""Declarative generation plans loaded from TOML files.

Example plan:

    [[tables]]
    name = "users"
    num_rows = 10

      [[tables.fields]]
      name = "id"
      type = "INTEGER PRIMARY KEY"

      [[tables.fields]]
      name = "email"
      type = "TEXT NOT NULL"
      faker = "email"

    [[tables]]
    name = "posts"
    num_rows = 50

      [[tables.fields]]
      name = "user_id"
      type = "INTEGER REFERENCES users(id)"
      ref = "users"
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from faker import Faker
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, model_validator

from sqlite_datagen.exceptions import PlanError
from sqlite_datagen.models import FieldDefinition, TableDefinition
from sqlite_datagen.providers import (
    FakerProvider,
    ReferenceProvider,
    SequenceProvider,
    StaticProvider,
    ValueProvider,
    get_provider,
    list_providers,
)

if TYPE_CHECKING:
    from sqlite_datagen.generator import DataGenerator

# Plan keys that select a field's value provider
GENERATOR_KEYS = ("faker", "ref", "value", "sequence", "provider")

# `faker = "auto"` picks a method from the column name and type
AUTO_FAKER = "auto"


class FieldSpec(BaseModel):
    """One [[tables.fields]] entry."""

    model_config = ConfigDict(extra="forbid")

    type: str
    name: Optional[str] = None
    faker: Optional[str] = None
    faker_args: dict[str, Any] = Field(default_factory=dict)
    ref: Optional[str] = None
    ref_filter: str = ""
    ref_column: str = "id"
    value: Any = None
    sequence: Optional[list[Any]] = None
    cycle: bool = False
    provider: Optional[str] = None
    provider_args: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_generator(self) -> FieldSpec:
        chosen = [key for key in GENERATOR_KEYS if getattr(self, key) is not None]
        if len(chosen) > 1:
            raise ValueError(
                f"field '{self.name}' sets more than one generator: {', '.join(chosen)}"
            )
        if chosen and not self.name:
            raise ValueError(f"unnamed field '{self.type}' cannot have a generator")
        return self

    def build_provider(
        self, generator: DataGenerator, faker: Faker
    ) -> Optional[ValueProvider]:
        """
        Create the value provider this entry describes.

        Raises:
            ValueError: If a faker method or registered provider is unknown
        """
        if self.faker == AUTO_FAKER:
            return FakerProvider.for_field(self.name, self.type, faker=faker)
        if self.faker is not None:
            return FakerProvider(self.faker, faker=faker, **self.faker_args)
        if self.ref is not None:
            return ReferenceProvider(
                generator, self.ref, filter=self.ref_filter, column=self.ref_column
            )
        if self.value is not None:
            return StaticProvider(self.value)
        if self.sequence is not None:
            return SequenceProvider(self.sequence, cycle=self.cycle)
        if self.provider is not None:
            provider_class = get_provider(self.provider)
            if provider_class is None:
                raise ValueError(
                    f"Unknown provider '{self.provider}'. "
                    f"Registered: {', '.join(list_providers()) or 'none'}. "
                    f"Register custom providers with register_provider()."
                )
            return provider_class(**self.provider_args)
        return None


class TableSpec(BaseModel):
    """One [[tables]] entry."""

    model_config = ConfigDict(extra="forbid")

    name: str
    num_rows: int = Field(default=0, ge=0)
    fields: list[FieldSpec] = Field(default_factory=list)


class GenerationPlan(BaseModel):
    """Ordered list of tables to create and populate."""

    model_config = ConfigDict(extra="forbid")

    tables: list[TableSpec] = Field(default_factory=list)

    _source: str = PrivateAttr(default="<plan>")

    @classmethod
    def from_toml(cls, path: Path | str) -> GenerationPlan:
        """
        Load and validate a plan file.

        Args:
            path: Path to the TOML plan

        Returns:
            GenerationPlan instance

        Raises:
            PlanError: If the file is missing, not TOML, or fails validation
        """
        plan_path = Path(path)
        if not plan_path.exists():
            raise PlanError(str(plan_path), "file not found")

        try:
            with open(plan_path, "rb") as f:
                data = tomllib.load(f)
            plan = cls(**data)
        except (tomllib.TOMLDecodeError, ValidationError) as err:
            raise PlanError(str(plan_path), str(err)) from err

        plan._source = str(plan_path)
        return plan

    def to_tables(
        self, generator: DataGenerator, faker: Optional[Faker] = None
    ) -> list[TableDefinition]:
        """
        Bind the plan to a generator.

        Args:
            generator: Generator used by `ref` fields for id lookups
            faker: Faker instance shared by all faker fields (new one if None)

        Returns:
            Table definitions in plan order

        Raises:
            PlanError: If a field's provider cannot be built
        """
        faker = faker or Faker()
        tables = []
        for table in self.tables:
            fields = []
            for spec in table.fields:
                try:
                    provider = spec.build_provider(generator, faker)
                except (TypeError, ValueError) as err:
                    raise PlanError(
                        self._source, f"table '{table.name}', field '{spec.name}': {err}"
                    ) from err
                fields.append(FieldDefinition(type=spec.type, name=spec.name, generator=provider))
            tables.append(
                TableDefinition(name=table.name, fields=fields, num_rows=table.num_rows)
            )
        return tables
