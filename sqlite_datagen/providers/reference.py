"""Foreign-key reference provider."""

from typing import TYPE_CHECKING, Any

from sqlite_datagen.providers.base import ValueProvider

if TYPE_CHECKING:
    from sqlite_datagen.generator import DataGenerator


class ReferenceProvider(ValueProvider):
    """
    Provide a random existing id from another table.

    The referenced table must already be populated, so list it before the
    referencing table in DataGenerator.generate().

    Example:
        >>> FieldDefinition(
        ...     name="user_id",
        ...     type="INTEGER REFERENCES users(id)",
        ...     generator=ReferenceProvider(gen, "users", filter="active = 1"),
        ... )
    """

    def __init__(
        self,
        generator: "DataGenerator",
        table: str,
        filter: str = "",
        column: str = "id",
    ):
        self.generator = generator
        self.table = table
        self.filter = filter
        self.column = column

    async def provide(self) -> Any:
        return await self.generator.get_random_id_from_table(
            self.table, self.filter, column=self.column
        )

    def __repr__(self) -> str:
        return f"ReferenceProvider({self.table!r}, filter={self.filter!r})"
