"""Command-line interface for FleetGrid.

This module provides the CLI commands for running and managing
the FleetGrid application.
"""

import asyncio

import click

from fleetgrid import __version__
from fleetgrid.core.config import get_settings
from fleetgrid.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="FleetGrid")
def cli() -> None:
    """FleetGrid - role-gated fleet records with spreadsheet import and export.

    Settings are read from FLEETGRID_* environment variables and .env files.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the FleetGrid server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)
    logger = get_logger(__name__)
    logger.info(
        "Starting FleetGrid server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "fleetgrid.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
def init_db() -> None:
    """Create all database tables that don't exist yet.

    Also creates the bootstrap admin when FLEETGRID_ADMIN_EMAIL and
    FLEETGRID_ADMIN_PASSWORD are set.
    """
    from fleetgrid.infrastructure.persistence.database import (
        close_database,
        init_database,
    )

    configure_logging(get_settings())

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await close_database()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Admin email (prompts if not provided)")
@click.option("--name", type=str, default=None, help="Display name (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Admin password (prompts if not provided)",
)
def create_admin(email: str | None, name: str | None, password: str | None) -> None:
    """Create an ADMIN account.

    Signup only ever creates MANAGER accounts, so the first ADMIN is
    created here.
    """
    from fleetgrid.domain.entities import Role
    from fleetgrid.domain.exceptions import FleetGridError
    from fleetgrid.domain.services import AccountService
    from fleetgrid.infrastructure.persistence.database import (
        close_database,
        get_db_manager,
        init_database,
    )

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Admin email", type=str)
    if name is None:
        name = click.prompt("Display name", type=str, default=settings.admin_name)
    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    async def create() -> None:
        try:
            await init_database()
            async with get_db_manager().session() as session:
                account = await AccountService(session).create_account(
                    name=name, email=email, password=password, role=Role.ADMIN
                )
        except FleetGridError as e:
            click.echo(f"Error: {e.message}", err=True)
            logger.error("Admin creation failed", error=e.message)
            raise SystemExit(1)
        finally:
            await close_database()

        click.echo(
            f"\nAdmin created successfully!\n"
            f"  Account ID: {account.id}\n"
            f"  Email:      {account.email}\n"
        )
        logger.info("Admin created via CLI", account_id=account.id)

    asyncio.run(create())


@cli.command()
def info() -> None:
    """Display FleetGrid configuration."""
    settings = get_settings()

    click.echo(f"""
FleetGrid v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Cookie:       {settings.session_cookie_name}
  Session:      {settings.session_expire_days} days
  Secret:       {"default (change it!)" if settings.uses_default_secret else "configured"}

Uploads:
  Max size:     {settings.max_upload_size} bytes

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the CLI.

    Called by the `fleetgrid` console script and by `python -m fleetgrid`.
    """
    cli()


if __name__ == "__main__":
    main()
