"""Custom exceptions with helpful error messages."""


class DataGeneratorError(Exception):
    """Base exception for sqlite-datagen errors."""

    pass


class ConnectionError(DataGeneratorError):
    """Database connection could not be opened, used or closed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Database connection error: {message}")


class SchemaError(DataGeneratorError):
    """CREATE TABLE statement failed."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(
            f"Error creating table {table}: {message}\n\n"
            f"Suggestions:\n"
            f"1. Check field types and constraint clauses for typos\n"
            f"2. Make sure unnamed fields only hold table constraints"
        )


class DataGenerationError(DataGeneratorError):
    """A field's value provider failed while building rows."""

    def __init__(self, field: str, table: str, message: str):
        self.field = field
        self.table = table
        self.message = message
        super().__init__(
            f"Error generating data for field {field} in table {table}: {message}"
        )


class InsertError(DataGeneratorError):
    """INSERT statement failed."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(
            f"Error inserting data into table {table}: {message}\n\n"
            f"Suggestions:\n"
            f"1. Ensure '{table}' was created before inserting\n"
            f"2. Check generated values against NOT NULL / UNIQUE / CHECK constraints\n"
            f"3. Referenced tables must be generated before dependent ones"
        )


class QueryError(DataGeneratorError):
    """Random id lookup failed."""

    def __init__(self, table: str, message: str):
        self.table = table
        self.message = message
        super().__init__(f"Error getting random ID from table {table}: {message}")


class PlanError(DataGeneratorError):
    """Generation plan file is missing or invalid."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Invalid generation plan '{source}': {message}")
