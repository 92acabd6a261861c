"""Named ValueProvider classes, for `provider = "<name>"` fields in plan files."""

from sqlite_datagen.providers.base import ValueProvider


class ProviderRegistry:
    """Maps plan-file provider names to ValueProvider subclasses."""

    def __init__(self):
        self._providers: dict[str, type[ValueProvider]] = {}

    def register(self, name: str, provider_class: type) -> None:
        """
        Make provider_class available to plan files as `provider = name`.

        Registering a name again replaces the earlier class.

        Raises:
            TypeError: If provider_class is not a ValueProvider subclass
        """
        if not (isinstance(provider_class, type) and issubclass(provider_class, ValueProvider)):
            raise TypeError(
                f"Provider '{name}' must be a ValueProvider subclass, "
                f"got {provider_class!r}. Subclass ValueProvider and implement "
                f"`async def provide(self)`."
            )
        self._providers[name] = provider_class

    def get(self, name: str) -> type[ValueProvider] | None:
        return self._providers.get(name)

    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._providers)

    def clear(self) -> None:
        self._providers.clear()


_registry = ProviderRegistry()


def register_provider(name: str, provider_class: type) -> None:
    """
    Register a ValueProvider subclass under a plan-file name.

    Plan fields instantiate it with their `provider_args` table as keyword
    arguments.

    Example:
        >>> class SKUProvider(ValueProvider):
        ...     def __init__(self, prefix="SKU"):
        ...         self.prefix = prefix
        ...         self.counter = 0
        ...
        ...     async def provide(self):
        ...         self.counter += 1
        ...         return f"{self.prefix}-{self.counter:06d}"
        >>>
        >>> register_provider("sku", SKUProvider)
        >>> # plan.toml: provider = "sku", provider_args = { prefix = "P" }

    Raises:
        TypeError: If provider_class is not a ValueProvider subclass
    """
    _registry.register(name, provider_class)


def get_provider(name: str) -> type[ValueProvider] | None:
    """Registered class for name, or None."""
    return _registry.get(name)


def list_providers() -> list[str]:
    return _registry.names()


def clear_providers() -> None:
    """Forget every registered provider (used by tests)."""
    _registry.clear()
