"""CLI commands for sqlite-datagen."""

import asyncio
import logging
import sys
from pathlib import Path

import click
from faker import Faker

from sqlite_datagen.config import DataGenSettings
from sqlite_datagen.exceptions import DataGeneratorError
from sqlite_datagen.generator import DataGenerator
from sqlite_datagen.plan import GenerationPlan

logger = logging.getLogger(__name__)


def _load_settings(config_path: Path | None) -> DataGenSettings:
    """Load settings from --config, else the nearest sqlite-datagen.toml, else defaults."""
    if config_path is not None:
        return DataGenSettings.from_toml(config_path)
    try:
        return DataGenSettings.find_and_load()
    except FileNotFoundError:
        return DataGenSettings()


def _configure_logging(verbose: int, default_level: str = "WARNING") -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(default_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


async def _run_plan(
    plan: GenerationPlan, database: str, batch_size: int | None, faker: Faker
) -> dict[str, int]:
    async with DataGenerator.from_path(database, batch_size=batch_size) as gen:
        return await gen.generate(plan.to_tables(gen, faker=faker))


async def _random_id(database: str, table: str, filter: str, column: str):
    async with DataGenerator.from_path(database) as gen:
        return await gen.get_random_id_from_table(table, filter, column=column)


@click.group()
@click.version_option(package_name="sqlite-datagen")
def cli() -> None:
    """sqlite-datagen - populate SQLite databases with synthetic example data."""
    pass


@cli.command()
@click.argument("plan_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--database", "-d", help="SQLite database file (default from settings)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (default: nearest sqlite-datagen.toml)",
)
@click.option("--batch-size", type=click.IntRange(min=1), help="Maximum rows per INSERT")
@click.option("--seed", type=int, help="Faker seed for reproducible data")
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for SQL")
def generate(
    plan_file: Path,
    database: str | None,
    config_path: Path | None,
    batch_size: int | None,
    seed: int | None,
    verbose: int,
) -> None:
    """Create and populate the tables listed in PLAN_FILE."""
    try:
        settings = _load_settings(config_path)
    except ValueError as e:
        click.echo(f"Error: invalid settings: {e}", err=True)
        sys.exit(1)
    _configure_logging(verbose, settings.log_level)

    faker = Faker(settings.faker_locale)
    seed = seed if seed is not None else settings.faker_seed
    if seed is not None:
        faker.seed_instance(seed)

    database = database or settings.database
    logger.info(f"Generating data into {database}")

    try:
        plan = GenerationPlan.from_toml(plan_file)
        counts = asyncio.run(
            _run_plan(plan, database, batch_size or settings.batch_size, faker)
        )
    except DataGeneratorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for table, count in counts.items():
        click.echo(f"{table}: {count} rows")


@cli.command("random-id")
@click.argument("database", type=click.Path(exists=True, dir_okay=False))
@click.argument("table")
@click.option("--where", "filter_", default="", help="SQL condition rows must match")
@click.option("--column", default="id", help="Column to return (default: id)")
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for SQL")
def random_id(database: str, table: str, filter_: str, column: str, verbose: int) -> None:
    """Print a random id from TABLE in DATABASE.

    Exits with status 1 when no row matches.
    """
    _configure_logging(verbose)

    try:
        value = asyncio.run(_random_id(database, table, filter_, column))
    except DataGeneratorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if value is None:
        click.echo(f"No matching row in {table}", err=True)
        sys.exit(1)
    click.echo(value)


if __name__ == "__main__":
    cli()
