"""DataGenerator - create tables and fill them with example rows."""

import asyncio
import logging
import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import aiosqlite

from sqlite_datagen.exceptions import (
    ConnectionError,
    DataGenerationError,
    InsertError,
    QueryError,
    SchemaError,
)
from sqlite_datagen.models import FieldDefinition, TableDefinition
from sqlite_datagen.providers.base import ValueProvider
from sqlite_datagen.sql import (
    build_create_table,
    build_default_insert,
    build_insert,
    build_random_id_query,
)

# Types sqlite3 binds without an adapter; everything else is bound as str()
_NATIVE_TYPES = (type(None), int, float, str, bytes, bytearray, memoryview)

_DISCONNECTED = "disconnected"
_CONNECTED = "connected"
_CLOSED = "closed"


def _to_sql_value(value: Any) -> Any:
    if isinstance(value, _NATIVE_TYPES):
        return value
    return str(value)


class DataGenerator:
    """
    Populate a SQLite database with synthetic example data.

    Statements run one at a time on the aiosqlite worker thread, in the
    order they are awaited. Await each call before issuing the next one.

    Example:
        >>> async with DataGenerator.from_path("example.db") as gen:
        ...     await gen.generate([
        ...         TableDefinition(
        ...             name="users",
        ...             fields=[
        ...                 FieldDefinition(name="id", type="INTEGER PRIMARY KEY"),
        ...                 FieldDefinition(
        ...                     name="email", type="TEXT", generator=FakerProvider("email")
        ...                 ),
        ...             ],
        ...             num_rows=10,
        ...         ),
        ...         TableDefinition(
        ...             name="posts",
        ...             fields=[
        ...                 FieldDefinition(name="id", type="INTEGER PRIMARY KEY"),
        ...                 FieldDefinition(
        ...                     name="user_id",
        ...                     type="INTEGER REFERENCES users(id)",
        ...                     generator=lambda: gen.get_random_id_from_table("users"),
        ...                 ),
        ...             ],
        ...             num_rows=50,
        ...         ),
        ...     ])
    """

    def __init__(
        self,
        connection: aiosqlite.Connection,
        logger: logging.Logger | None = None,
        batch_size: int | None = None,
    ):
        """
        Initialize DataGenerator.

        Args:
            connection: aiosqlite connection (started or not); owned by the
                generator from now on and closed by disconnect()
            logger: Receives every SQL statement at DEBUG before execution
                (module logger if omitted)
            batch_size: Maximum rows per INSERT statement (None: one
                statement per table)

        Raises:
            ValueError: If batch_size is not positive
        """
        if batch_size is not None and batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._connection = connection
        self.logger = logger or logging.getLogger(__name__)
        self.batch_size = batch_size
        self._state = _DISCONNECTED

    @classmethod
    def from_path(
        cls,
        database: str | Path,
        logger: logging.Logger | None = None,
        batch_size: int | None = None,
    ) -> "DataGenerator":
        """
        Create a generator for a database file.

        Args:
            database: SQLite file path (":memory:" for a private in-memory db)
            logger: See __init__
            batch_size: See __init__

        Returns:
            Disconnected DataGenerator; call connect() or use `async with`
        """
        return cls(aiosqlite.connect(database), logger=logger, batch_size=batch_size)

    @property
    def is_connected(self) -> bool:
        return self._state == _CONNECTED

    async def __aenter__(self) -> "DataGenerator":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        """
        Open the connection and start its serialized worker.

        Calling connect() on a connected generator does nothing.

        Raises:
            ConnectionError: If the database cannot be opened, or the
                generator was already disconnected (no reconnect)
        """
        if self._state == _CLOSED:
            raise ConnectionError(
                "connection already closed; create a new DataGenerator to reconnect"
            )
        if self._state == _CONNECTED:
            return

        try:
            await self._connection
        except sqlite3.Error as err:
            raise ConnectionError(str(err)) from err
        self._state = _CONNECTED
        self.logger.debug("Database connection ready")

    async def disconnect(self) -> None:
        """
        Close the connection. Closing twice does nothing.

        Raises:
            ConnectionError: If the driver reports an error while closing
        """
        if self._state == _CLOSED:
            return

        try:
            await self._connection.close()
        except sqlite3.Error as err:
            raise ConnectionError(
                f"Error closing the database connection: {err}"
            ) from err
        finally:
            self._state = _CLOSED
        self.logger.debug("Database connection closed")

    async def create_table(self, table: TableDefinition) -> None:
        """
        Create the table if it doesn't exist yet.

        Args:
            table: Table definition

        Raises:
            SchemaError: If the CREATE TABLE statement fails
            ConnectionError: If not connected
        """
        self._ensure_connected()
        sql = build_create_table(table)
        self.logger.debug(f"Executing create query: {sql}")

        try:
            async with self._connection.execute(sql):
                pass
            await self._connection.commit()
        except sqlite3.Error as err:
            raise SchemaError(table.name, str(err)) from err

    async def insert_example_data(self, table: TableDefinition) -> int:
        """
        Generate table.num_rows rows and insert them.

        All values are resolved before anything is executed. Fields of one
        row are generated concurrently; rows are generated in order, so
        providers that look up earlier rows see a consistent database.
        Fields without a generator get NULL.

        Args:
            table: Table definition

        Returns:
            Number of rows inserted

        Raises:
            DataGenerationError: If a field's generator fails
            InsertError: If the INSERT statement fails
            ConnectionError: If not connected
        """
        self._ensure_connected()

        if table.num_rows == 0:
            self.logger.debug(f"Skipping insert into {table.name}: no rows requested")
            return 0

        fields = table.named_fields
        if not fields:
            # No columns to bind: let SQLite fill every column
            sql = build_default_insert(table)
            self.logger.debug(f"Executing insert query ({table.num_rows}x): {sql}")
            try:
                await self._connection.executemany(sql, [()] * table.num_rows)
                await self._connection.commit()
            except sqlite3.Error as err:
                await self._rollback_failed_insert(table)
                raise InsertError(table.name, str(err)) from err
            return table.num_rows

        providers = [(f, f.provider) for f in fields]
        rows = []
        for _ in range(table.num_rows):
            rows.append(await self._generate_row(table, providers))

        batch_size = self.batch_size or len(rows)
        for start in range(0, len(rows), batch_size):
            batch = rows[start : start + batch_size]
            sql = build_insert(table, len(batch))

            # Flatten values: [row1_col1, row1_col2, row2_col1, row2_col2, ...]
            values = [value for row in batch for value in row]

            self.logger.debug(f"Executing insert query: {sql}")
            try:
                async with self._connection.execute(sql, values):
                    pass
                await self._connection.commit()
            except sqlite3.Error as err:
                await self._rollback_failed_insert(table)
                raise InsertError(table.name, str(err)) from err

        return len(rows)

    async def get_random_id_from_table(
        self,
        table_name: str,
        filter: str = "",
        column: str = "id",
    ) -> Any:
        """
        Pick a random existing id, e.g. for a foreign key value.

        Args:
            table_name: Table to pick from
            filter: Optional WHERE condition, used verbatim (not escaped)
            column: Column to return (default "id")

        Returns:
            The column value of a random matching row, or None if no row matches

        Raises:
            QueryError: If the SELECT fails (e.g. unknown table or column)
            ConnectionError: If not connected
        """
        self._ensure_connected()
        sql = build_random_id_query(table_name, filter, column)
        self.logger.debug(f"Executing select query: {sql}")

        try:
            async with self._connection.execute(sql) as cursor:
                row = await cursor.fetchone()
        except sqlite3.Error as err:
            raise QueryError(table_name, str(err)) from err

        return row[0] if row is not None else None

    async def generate(self, tables: Iterable[TableDefinition]) -> dict[str, int]:
        """
        Create and populate tables one after another, in the given order.

        Each table is fully inserted before the next one starts, so later
        generators can reference rows of earlier tables. The first failure
        stops the run; tables already populated are kept.

        Args:
            tables: Table definitions in dependency order

        Returns:
            Dict mapping table name to number of rows inserted

        Raises:
            SchemaError, DataGenerationError, InsertError: From the failing step
        """
        inserted: dict[str, int] = {}
        for table in tables:
            self.logger.info(f"Generating {table.num_rows} rows for table '{table.name}'")
            await self.create_table(table)
            count = await self.insert_example_data(table)
            inserted[table.name] = inserted.get(table.name, 0) + count
        return inserted

    async def _generate_row(
        self,
        table: TableDefinition,
        providers: list[tuple[FieldDefinition, ValueProvider | None]],
    ) -> list[Any]:
        """
        Resolve one row, values in field order.

        Every field settles before this returns, even when one fails; the
        first failure in field order is then raised.
        """
        results = await asyncio.gather(
            *(self._generate_value(table, f, p) for f, p in providers),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def _rollback_failed_insert(self, table: TableDefinition) -> None:
        """Discard the transaction a failed INSERT opened; never masks the InsertError."""
        try:
            await self._connection.rollback()
        except (sqlite3.Error, ValueError) as err:
            self.logger.warning(f"Rollback after failed insert into {table.name} failed: {err}")

    async def _generate_value(
        self,
        table: TableDefinition,
        field: FieldDefinition,
        provider: ValueProvider | None,
    ) -> Any:
        if provider is None:
            return None
        try:
            value = await provider.provide()
        except Exception as err:
            raise DataGenerationError(
                field.name, table.name, str(err) or type(err).__name__
            ) from err
        return _to_sql_value(value)

    def _ensure_connected(self) -> None:
        if self._state != _CONNECTED:
            raise ConnectionError(
                f"DataGenerator is {self._state}; call connect() first"
            )
