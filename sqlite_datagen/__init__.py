"""
sqlite-datagen - Synthetic Example Data for SQLite

Creates tables from field definitions and fills them with generated rows,
with per-field value providers and random id lookups for foreign keys.
"""

from sqlite_datagen.exceptions import (
    ConnectionError,
    DataGenerationError,
    DataGeneratorError,
    InsertError,
    PlanError,
    QueryError,
    SchemaError,
)
from sqlite_datagen.generator import DataGenerator
from sqlite_datagen.models import FieldDefinition, TableDefinition
from sqlite_datagen.plan import GenerationPlan
from sqlite_datagen.providers import (
    CallableProvider,
    FakerProvider,
    ReferenceProvider,
    SequenceProvider,
    StaticProvider,
    ValueProvider,
    clear_providers,
    list_providers,
    register_provider,
)

__version__ = "0.1.0"

__all__ = [
    "DataGenerator",
    "TableDefinition",
    "FieldDefinition",
    "GenerationPlan",
    "ValueProvider",
    "StaticProvider",
    "CallableProvider",
    "SequenceProvider",
    "FakerProvider",
    "ReferenceProvider",
    "register_provider",
    "list_providers",
    "clear_providers",
    "DataGeneratorError",
    "ConnectionError",
    "SchemaError",
    "DataGenerationError",
    "InsertError",
    "QueryError",
    "PlanError",
]
