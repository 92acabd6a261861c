"""Test value providers and the provider registry."""

import asyncio

import pytest
from faker import Faker

from sqlite_datagen import (
    CallableProvider,
    FakerProvider,
    SequenceProvider,
    StaticProvider,
    ValueProvider,
    clear_providers,
    list_providers,
    register_provider,
)
from sqlite_datagen.providers import get_provider


@pytest.fixture(autouse=True)
def empty_registry():
    clear_providers()
    yield
    clear_providers()


@pytest.mark.asyncio
async def test_static_provider():
    provider = StaticProvider("same")

    assert [await provider.provide() for _ in range(3)] == ["same"] * 3


@pytest.mark.asyncio
async def test_callable_provider_sync():
    """Test plain functions are called once per value."""
    counter = iter(range(1, 10))
    provider = CallableProvider(lambda: next(counter))

    assert await provider.provide() == 1
    assert await provider.provide() == 2


@pytest.mark.asyncio
async def test_callable_provider_async():
    """Test coroutine functions are awaited."""

    async def slow_value():
        await asyncio.sleep(0)
        return "deferred"

    assert await CallableProvider(slow_value).provide() == "deferred"


@pytest.mark.asyncio
async def test_callable_provider_future():
    """Test callables returning a future are awaited."""
    loop = asyncio.get_running_loop()

    def make_future():
        future = loop.create_future()
        loop.call_soon(future.set_result, 42)
        return future

    assert await CallableProvider(make_future).provide() == 42


@pytest.mark.asyncio
async def test_sequence_provider_exhausted():
    """Test a non-cycling sequence fails once all values are used."""
    provider = SequenceProvider(["a", "b"])

    assert await provider.provide() == "a"
    assert await provider.provide() == "b"
    with pytest.raises(ValueError, match="exhausted"):
        await provider.provide()


@pytest.mark.asyncio
async def test_sequence_provider_cycle():
    provider = SequenceProvider([1, 2], cycle=True)

    assert [await provider.provide() for _ in range(5)] == [1, 2, 1, 2, 1]


def test_sequence_provider_cannot_cycle_empty():
    with pytest.raises(ValueError, match="empty"):
        SequenceProvider([], cycle=True)


@pytest.mark.asyncio
async def test_faker_provider_seeded_is_reproducible():
    """Test two providers with the same seed produce the same values."""
    first = FakerProvider("email", seed=1234)
    second = FakerProvider("email", seed=1234)

    values = [await first.provide() for _ in range(3)]

    assert values == [await second.provide() for _ in range(3)]
    assert all("@" in v for v in values)


@pytest.mark.asyncio
async def test_faker_provider_passes_arguments():
    provider = FakerProvider("random_int", min=5, max=7, seed=1)

    for _ in range(10):
        assert 5 <= await provider.provide() <= 7


def test_faker_provider_unknown_method():
    with pytest.raises(ValueError, match="Unknown Faker method 'not_a_method'"):
        FakerProvider("not_a_method")


def test_faker_provider_for_field():
    """Test method selection by column name, then by declared type."""
    faker = Faker()

    assert FakerProvider.for_field("email", "TEXT", faker=faker).method == "email"
    assert FakerProvider.for_field("qty", "INTEGER NOT NULL", faker=faker).method == "random_int"
    assert FakerProvider.for_field("label", "VARCHAR(20)", faker=faker).method == "word"
    assert FakerProvider.for_field("stuff", "", faker=faker).method == "word"


@pytest.mark.asyncio
async def test_register_custom_provider():
    """Test registering and looking up a custom provider."""

    class SKUProvider(ValueProvider):
        def __init__(self, prefix="SKU"):
            self.prefix = prefix
            self.counter = 0

        async def provide(self):
            self.counter += 1
            return f"{self.prefix}-{self.counter:06d}"

    register_provider("sku", SKUProvider)

    assert "sku" in list_providers()
    provider = get_provider("sku")(prefix="P")
    assert await provider.provide() == "P-000001"
    assert await provider.provide() == "P-000002"


def test_register_provider_requires_value_provider_subclass():
    """Test duck-typed classes with a provide method are refused at registration."""

    class LooksLikeAProvider:
        def provide(self):
            return "x"

    with pytest.raises(TypeError, match="must be a ValueProvider subclass"):
        register_provider("lookalike", LooksLikeAProvider)
    with pytest.raises(TypeError, match="must be a ValueProvider subclass"):
        register_provider("instance", StaticProvider("x"))

    assert "lookalike" not in list_providers()


def test_unknown_provider_is_none():
    assert get_provider("missing") is None
