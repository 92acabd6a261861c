"""Faker-based value provider."""

from typing import Any

from faker import Faker

from sqlite_datagen.providers.base import ValueProvider


class FakerProvider(ValueProvider):
    """Generate realistic values using the Faker library."""

    # Column name → Faker method mapping
    COLUMN_MAPPINGS = {
        "email": "email",
        "first_name": "first_name",
        "last_name": "last_name",
        "name": "name",
        "username": "user_name",
        "company": "company",
        "phone": "phone_number",
        "phone_number": "phone_number",
        "address": "address",
        "street": "street_address",
        "city": "city",
        "state": "state",
        "country": "country",
        "zip": "zipcode",
        "zipcode": "zipcode",
        "url": "url",
        "title": "sentence",
        "description": "paragraph",
        "bio": "paragraph",
        "created_at": "iso8601",
        "updated_at": "iso8601",
    }

    # SQLite declared type → Faker method fallbacks
    TYPE_FALLBACKS = {
        "text": "word",
        "varchar": "word",
        "integer": "random_int",
        "int": "random_int",
        "real": "pyfloat",
        "numeric": "pyfloat",
        "float": "pyfloat",
        "boolean": "boolean",
        "date": "date",
        "datetime": "iso8601",
        "timestamp": "iso8601",
    }

    def __init__(
        self,
        method: str,
        *args: Any,
        locale: str | None = None,
        seed: int | None = None,
        faker: Faker | None = None,
        **kwargs: Any,
    ):
        """
        Initialize provider.

        Args:
            method: Faker method name (e.g. "email", "date_time_this_year")
            *args: Positional arguments passed to the method
            locale: Faker locale (ignored when faker is given)
            seed: Seed for reproducible output
            faker: Existing Faker instance to share between providers
            **kwargs: Keyword arguments passed to the method

        Raises:
            ValueError: If Faker has no such method
        """
        self.faker = faker or Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)
        try:
            self._method = getattr(self.faker, method)
        except AttributeError:
            raise ValueError(f"Unknown Faker method '{method}'") from None
        self.method = method
        self.args = args
        self.kwargs = kwargs

    @classmethod
    def for_field(cls, column_name: str, sql_type: str, **options: Any) -> "FakerProvider":
        """
        Pick a Faker method from the column name, falling back to its type.

        Args:
            column_name: Column name (e.g. "email")
            sql_type: Declared type clause (e.g. "TEXT NOT NULL")
            **options: Passed to FakerProvider (locale, seed, faker)

        Returns:
            FakerProvider for the best matching method
        """
        if column_name in cls.COLUMN_MAPPINGS:
            return cls(cls.COLUMN_MAPPINGS[column_name], **options)

        words = sql_type.replace("(", " ").split()
        base_type = words[0].lower() if words else ""
        if base_type in cls.TYPE_FALLBACKS:
            return cls(cls.TYPE_FALLBACKS[base_type], **options)

        # Default: text
        return cls("word", **options)

    async def provide(self) -> Any:
        return self._method(*self.args, **self.kwargs)

    def __repr__(self) -> str:
        return f"FakerProvider({self.method!r})"
