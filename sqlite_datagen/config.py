"""
Configuration management for sqlite-datagen.

Settings come from (highest first) explicit arguments, SQLITE_DATAGEN_*
environment variables, and sqlite-datagen.toml files.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "sqlite-datagen.toml"


class DataGenSettings(BaseSettings):
    """Main configuration for sqlite-datagen."""

    model_config = SettingsConfigDict(env_prefix="SQLITE_DATAGEN_", extra="ignore")

    database: str = Field(default="example.db", description="SQLite database file path")
    batch_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum rows per INSERT statement (unset: one statement per table)",
    )
    log_level: str = Field(default="WARNING", description="Root logging level")
    faker_locale: Optional[str] = Field(default=None, description="Faker locale")
    faker_seed: Optional[int] = Field(
        default=None, description="Faker seed for reproducible data"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> DataGenSettings:
        """
        Read settings from a TOML file of top-level keys.

        Keys the file leaves out fall back to SQLITE_DATAGEN_* variables,
        then to the field defaults.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file is not TOML or a value fails validation
        """
        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Settings file not found: {config_path}")

        return cls(**tomllib.loads(config_path.read_text()))

    @staticmethod
    def locate(start_dir: Optional[Path] = None) -> Optional[Path]:
        """
        Return the sqlite-datagen.toml closest to start_dir (cwd by default).

        start_dir itself is checked first, then each parent directory.
        """
        start = Path(start_dir or Path.cwd()).resolve()
        for directory in (start, *start.parents):
            candidate = directory / CONFIG_FILENAME
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> DataGenSettings:
        """
        Load the settings file found by locate().

        Raises:
            FileNotFoundError: If no sqlite-datagen.toml exists up the tree
        """
        config_path = cls.locate(start_dir)
        if config_path is None:
            raise FileNotFoundError(
                f"No {CONFIG_FILENAME} in {start_dir or Path.cwd()} or any parent directory"
            )
        return cls.from_toml(config_path)
