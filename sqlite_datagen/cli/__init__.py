"""Command-line interface for sqlite-datagen."""

from sqlite_datagen.cli.main import cli

__all__ = ["cli"]
