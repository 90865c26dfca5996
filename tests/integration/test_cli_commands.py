"""Integration tests for the lms-modules CLI against a file-based SQLite database."""

import json

import pytest
from click.testing import CliRunner

from lms_modules.cli import cli
from lms_modules.core.config import get_settings
from lms_modules.infrastructure.persistence import database


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a throwaway database and a fresh database manager."""
    monkeypatch.setenv("LMS_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/cli.db")
    monkeypatch.setenv("LMS_ENVIRONMENT", "testing")
    monkeypatch.setenv("LMS_LOG_FORMAT", "console")
    monkeypatch.setenv("LMS_LOG_LEVEL", "ERROR")
    get_settings.cache_clear()
    monkeypatch.setattr(database, "_db_manager", None)
    return tmp_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_init_db_creates_default_menu(cli_env, runner):
    result = runner.invoke(cli, ["init-db", "--force"])

    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output
    assert (cli_env / "cli.db").exists()

    result = runner.invoke(cli, ["menu"])

    assert result.exit_code == 0, result.output
    menu = json.loads(result.stdout)
    assert [g["name"] for g in menu] == [
        "Content Management",
        "User Management",
        "System Settings",
        "Analytics",
    ]
    assert all(g["modules"] == [] for g in menu)


def test_seed_is_idempotent(cli_env, runner):
    assert runner.invoke(cli, ["init-db", "--force"]).exit_code == 0

    result = runner.invoke(cli, ["seed"])

    assert result.exit_code == 0, result.output
    assert "Created 0 module group(s)." in result.output


def test_delete_group(cli_env, runner):
    assert runner.invoke(cli, ["init-db", "--force"]).exit_code == 0

    result = runner.invoke(cli, ["delete-group", "1", "--yes"])

    assert result.exit_code == 0, result.output
    assert "Module group 1 deleted." in result.output
    menu = json.loads(runner.invoke(cli, ["menu"]).stdout)
    assert len(menu) == 3
    assert "Content Management" not in [g["name"] for g in menu]


def test_delete_missing_group_fails(cli_env, runner):
    assert runner.invoke(cli, ["init-db", "--force"]).exit_code == 0

    result = runner.invoke(cli, ["delete-group", "999", "--yes"])

    assert result.exit_code == 1
    assert "ModuleGroup '999' not found" in result.output


def test_delete_group_requires_confirmation(cli_env, runner):
    assert runner.invoke(cli, ["init-db", "--force"]).exit_code == 0

    result = runner.invoke(cli, ["delete-group", "1"], input="n\n")

    assert result.exit_code == 1
    menu = json.loads(runner.invoke(cli, ["menu"]).stdout)
    assert len(menu) == 4


def test_init_db_refuses_production_without_force(cli_env, runner, monkeypatch):
    monkeypatch.setenv("LMS_ENVIRONMENT", "production")
    get_settings.cache_clear()

    result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 1
    assert "Use migrations instead of init-db" in result.output


def test_info_shows_configuration(cli_env, runner):
    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "lms-modules" in result.output
    assert "Environment:  testing" in result.output
    assert "cli.db" in result.output
