"""Command-line interface for lms-modules.

This module provides the CLI commands for creating the database, seeding the
default menu and inspecting or pruning module groups.
"""

import asyncio
import json

import click

from lms_modules.core.config import get_settings
from lms_modules.core.logging import bind_correlation_id, configure_logging, get_logger
from lms_modules.domain.exceptions import LmsModulesError
from lms_modules.infrastructure.persistence.database import get_db_manager


@click.group()
@click.version_option(version="0.1.0", prog_name="lms-modules")
def cli() -> None:
    """lms-modules - module groups and modules of the LMS admin menu.

    Settings are read from LMS_* environment variables and .env.
    """
    settings = get_settings()
    configure_logging(settings)
    bind_correlation_id()


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all tables and seeds the default module groups. Use this only in
    development; in production, use migrations instead.
    """
    from lms_modules.infrastructure.persistence.database import init_database

    settings = get_settings()

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def seed() -> None:
    """Seed the system user and the default module groups.

    Existing groups with the same name are left untouched.
    """
    from lms_modules.infrastructure.persistence.seed import seed_defaults

    logger = get_logger(__name__)

    async def run() -> int:
        db = get_db_manager()
        try:
            async with db.session() as session:
                created = await seed_defaults(session, db.settings)
                await session.commit()
            return created
        finally:
            await db.disconnect()

    created = asyncio.run(run())
    logger.info("Seeding finished", groups_created=created)
    click.echo(f"Created {created} module group(s).")


@cli.command()
@click.option(
    "--indent",
    type=int,
    default=2,
    show_default=True,
    help="JSON indentation",
)
def menu(indent: int) -> None:
    """Print every module group with its modules as JSON."""
    from lms_modules.domain.services import ModuleGroupService

    async def run() -> list[dict]:
        db = get_db_manager()
        try:
            async with db.session() as session:
                groups = await ModuleGroupService(session).build_menu()
            return [g.model_dump(mode="json") for g in groups]
        finally:
            await db.disconnect()

    click.echo(json.dumps(asyncio.run(run()), indent=indent))


@cli.command("delete-group")
@click.argument("group_id", type=int)
@click.option(
    "--yes",
    is_flag=True,
    help="Skip confirmation prompt",
)
def delete_group(group_id: int, yes: bool) -> None:
    """Delete a module group with all of its modules and their functions."""
    from lms_modules.domain.services import ModuleGroupService

    if not yes:
        click.confirm(
            f"Delete module group {group_id} and all of its modules?",
            abort=True,
            default=False,
        )

    async def run() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                await ModuleGroupService(session).delete_group(group_id)
                await session.commit()
        finally:
            await db.disconnect()

    try:
        asyncio.run(run())
    except LmsModulesError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Module group {group_id} deleted.")


@cli.command()
def info() -> None:
    """Display configuration."""
    settings = get_settings()

    click.echo(f"""
{settings.app_name} v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Database:
  URL:          {settings.database_url}
  Foreign Keys: {settings.db_sqlite_foreign_keys}
  Echo:         {settings.db_echo}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI.

    Called when the `lms-modules` command is run or when using
    `python -m lms_modules`.
    """
    cli()


if __name__ == "__main__":
    main()
