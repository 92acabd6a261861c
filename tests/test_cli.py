"""Test the sqlite-datagen command line."""

import sqlite3

import pytest
from click.testing import CliRunner

from sqlite_datagen.cli import cli

PLAN = """
[[tables]]
name = "users"
num_rows = 3

  [[tables.fields]]
  name = "id"
  type = "INTEGER PRIMARY KEY"

  [[tables.fields]]
  name = "email"
  type = "TEXT"
  faker = "email"

[[tables]]
name = "orders"
num_rows = 5

  [[tables.fields]]
  name = "id"
  type = "INTEGER PRIMARY KEY"

  [[tables.fields]]
  name = "user_id"
  type = "INTEGER REFERENCES users(id)"
  ref = "users"
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def plan_file(tmp_path):
    path = tmp_path / "plan.toml"
    path.write_text(PLAN)
    return path


def test_generate(runner, plan_file, db_path):
    """Test generate populates every table of the plan."""
    result = runner.invoke(
        cli, ["generate", str(plan_file), "--database", str(db_path), "--seed", "42"]
    )

    assert result.exit_code == 0, result.output
    assert "users: 3 rows" in result.output
    assert "orders: 5 rows" in result.output

    conn = sqlite3.connect(db_path)
    try:
        assert conn.execute("SELECT COUNT(*) FROM users WHERE email LIKE '%@%'").fetchone() == (3,)
        orphans = conn.execute(
            "SELECT COUNT(*) FROM orders WHERE user_id NOT IN (SELECT id FROM users)"
        ).fetchone()
        assert orphans == (0,)
    finally:
        conn.close()


def test_generate_uses_config_file(runner, plan_file, tmp_path):
    """Test the database path comes from --config when not given."""
    db_file = tmp_path / "from_config.db"
    config = tmp_path / "sqlite-datagen.toml"
    config.write_text(f'database = "{db_file.as_posix()}"\nbatch_size = 2\n')

    result = runner.invoke(cli, ["generate", str(plan_file), "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert db_file.exists()


def test_generate_invalid_plan(runner, tmp_path, db_path):
    """Test plan validation errors exit with status 1."""
    path = tmp_path / "bad.toml"
    path.write_text('[[tables]]\nname = "t"\nnum_rows = -1\n')

    result = runner.invoke(cli, ["generate", str(path), "--database", str(db_path)])

    assert result.exit_code == 1
    assert "Invalid generation plan" in result.output


def test_generate_reports_schema_error(runner, tmp_path, db_path):
    path = tmp_path / "bad_schema.toml"
    path.write_text(
        '[[tables]]\nname = "t"\nnum_rows = 1\n'
        '[[tables.fields]]\nname = "x"\ntype = "TEXT,,"\n'
    )

    result = runner.invoke(cli, ["generate", str(path), "--database", str(db_path)])

    assert result.exit_code == 1
    assert "Error creating table t" in result.output


def test_random_id(runner, plan_file, db_path):
    runner.invoke(cli, ["generate", str(plan_file), "--database", str(db_path)])

    result = runner.invoke(cli, ["random-id", str(db_path), "users", "--where", "id > 1"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() in {"2", "3"}


def test_random_id_no_match(runner, plan_file, db_path):
    runner.invoke(cli, ["generate", str(plan_file), "--database", str(db_path)])

    result = runner.invoke(cli, ["random-id", str(db_path), "users", "--where", "id > 100"])

    assert result.exit_code == 1
    assert "No matching row in users" in result.output


def test_random_id_unknown_table(runner, plan_file, db_path):
    runner.invoke(cli, ["generate", str(plan_file), "--database", str(db_path)])

    result = runner.invoke(cli, ["random-id", str(db_path), "missing"])

    assert result.exit_code == 1
    assert "Error getting random ID from table missing" in result.output
