"""Value provider interface and basic providers."""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from itertools import cycle as cycle_values
from typing import Any


class ValueProvider(ABC):
    """
    Base class for field value providers.

    A provider produces one value per generated row. Immediate providers
    return right away; deferred ones may await I/O (e.g. a random id lookup
    against an already populated table).

    Example:
        >>> class SKUProvider(ValueProvider):
        ...     def __init__(self):
        ...         self.counter = 0
        ...
        ...     async def provide(self):
        ...         self.counter += 1
        ...         return f"SKU-{self.counter:06d}"
        >>>
        >>> FieldDefinition(name="sku", type="TEXT", generator=SKUProvider())
    """

    @abstractmethod
    async def provide(self) -> Any:
        """
        Produce the value for the next row.

        Returns:
            Value to bind into the INSERT statement

        Raises:
            Exception: Any failure; reported as DataGenerationError
        """
        pass


class StaticProvider(ValueProvider):
    """Provide the same value for every row."""

    def __init__(self, value: Any):
        self.value = value

    async def provide(self) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"StaticProvider({self.value!r})"


class CallableProvider(ValueProvider):
    """
    Wrap a no-argument callable.

    The callable may return a plain value, or an awaitable (coroutine
    functions, functions returning futures); awaitables are awaited.
    """

    def __init__(self, func: Callable[[], Any]):
        if not callable(func):
            raise TypeError(f"Generator must be callable, got {type(func).__name__}")
        self.func = func

    async def provide(self) -> Any:
        value = self.func()
        if inspect.isawaitable(value):
            value = await value
        return value

    def __repr__(self) -> str:
        return f"CallableProvider({self.func!r})"


class SequenceProvider(ValueProvider):
    """
    Provide successive values from an iterable.

    Args:
        values: Values handed out in order
        cycle: Start over when the values run out (default False)

    Raises:
        ValueError: On provide() once a non-cycling sequence is exhausted
    """

    def __init__(self, values: Iterable[Any], cycle: bool = False):
        values = list(values)
        if cycle and not values:
            raise ValueError("Cannot cycle over an empty sequence")
        self._iterator = cycle_values(values) if cycle else iter(values)

    async def provide(self) -> Any:
        try:
            return next(self._iterator)
        except StopIteration:
            raise ValueError("Sequence exhausted") from None


def as_provider(generator: Any) -> ValueProvider | None:
    """
    Coerce a field generator into a ValueProvider.

    Args:
        generator: None, a ValueProvider, or a no-argument callable

    Returns:
        ValueProvider, or None when the field has no generator

    Raises:
        TypeError: If generator is neither a provider nor callable
    """
    if generator is None or isinstance(generator, ValueProvider):
        return generator
    return CallableProvider(generator)
