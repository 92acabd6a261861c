"""SQL statement builders.

Table and column names and field types are placed verbatim; row values are
always bound through `?` placeholders.
"""

from sqlite_datagen.models import TableDefinition


def build_create_table(table: TableDefinition) -> str:
    """
    Build the CREATE TABLE statement for a table definition.

    Example:
        >>> build_create_table(TableDefinition(
        ...     name="users",
        ...     fields=[
        ...         FieldDefinition(type="INTEGER PRIMARY KEY"),
        ...         FieldDefinition(name="email", type="TEXT"),
        ...     ],
        ... ))
        'CREATE TABLE IF NOT EXISTS users (INTEGER PRIMARY KEY, email TEXT)'
    """
    clauses = ", ".join(f.ddl_clause for f in table.fields)
    return f"CREATE TABLE IF NOT EXISTS {table.name} ({clauses})"


def build_insert(table: TableDefinition, row_count: int) -> str:
    """
    Build a multi-row INSERT with one placeholder group per row.

    Args:
        table: Table definition (only named fields are inserted)
        row_count: Number of VALUES groups

    Returns:
        INSERT statement, e.g.
        "INSERT INTO users (email, age) VALUES (?, ?), (?, ?)"

    Raises:
        ValueError: If row_count < 1 or the table has no named fields
    """
    if row_count < 1:
        raise ValueError("INSERT needs at least one row")
    columns = table.columns
    if not columns:
        raise ValueError(f"Table '{table.name}' has no named fields to insert")

    single_placeholder = f"({', '.join(['?'] * len(columns))})"
    placeholders = ", ".join([single_placeholder] * row_count)
    return f"INSERT INTO {table.name} ({', '.join(columns)}) VALUES {placeholders}"


def build_default_insert(table: TableDefinition) -> str:
    """Build an INSERT for tables without named fields."""
    return f"INSERT INTO {table.name} DEFAULT VALUES"


def build_random_id_query(table_name: str, filter: str = "", column: str = "id") -> str:
    """
    Build the random row lookup.

    Args:
        table_name: Table to pick from
        filter: Optional WHERE condition, inserted verbatim
        column: Column to select (default "id")

    Returns:
        "SELECT id FROM t [WHERE <filter>] ORDER BY RANDOM() LIMIT 1"
    """
    where = f" WHERE {filter}" if filter else ""
    return f"SELECT {column} FROM {table_name}{where} ORDER BY RANDOM() LIMIT 1"
