"""Value providers for generated fields."""

from sqlite_datagen.providers.base import (
    CallableProvider,
    SequenceProvider,
    StaticProvider,
    ValueProvider,
    as_provider,
)
from sqlite_datagen.providers.faker_provider import FakerProvider
from sqlite_datagen.providers.reference import ReferenceProvider
from sqlite_datagen.providers.registry import (
    clear_providers,
    get_provider,
    list_providers,
    register_provider,
)

__all__ = [
    "ValueProvider",
    "StaticProvider",
    "CallableProvider",
    "SequenceProvider",
    "FakerProvider",
    "ReferenceProvider",
    "as_provider",
    "register_provider",
    "get_provider",
    "list_providers",
    "clear_providers",
]
