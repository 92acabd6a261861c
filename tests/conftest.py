"""Pytest configuration and shared fixtures."""

import sqlite3
from pathlib import Path

import pytest
import pytest_asyncio

from sqlite_datagen import DataGenerator, FieldDefinition, TableDefinition


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh SQLite file for one test."""
    return tmp_path / "datagen_test.db"


@pytest_asyncio.fixture
async def generator(db_path: Path):
    """Provide a connected DataGenerator; closed after the test."""
    gen = DataGenerator.from_path(db_path)
    await gen.connect()

    yield gen

    await gen.disconnect()


@pytest.fixture
def fetch_all(db_path: Path):
    """
    Run a query against the test database with a separate sqlite3 connection.

    Returns rows as tuples.
    """

    def _fetch_all(sql: str, params: tuple = ()) -> list[tuple]:
        conn = sqlite3.connect(db_path)
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    return _fetch_all


@pytest.fixture
def users_table() -> TableDefinition:
    """Users table: rowid primary key, email and name without generators."""
    return TableDefinition(
        name="users",
        fields=[
            FieldDefinition(name="id", type="INTEGER PRIMARY KEY"),
            FieldDefinition(name="email", type="TEXT"),
            FieldDefinition(name="name", type="TEXT"),
        ],
        num_rows=3,
    )
