#!/usr/bin/env python3
"""
Main CLI entry point for the Meters server.
"""

import os
import sys

import click
import uvicorn

from meters import __version__
from meters.config import settings
from meters.logging import configure_logging, get_logger

logger = get_logger(__name__)

source_option = click.option(
    "--source",
    "source",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML meter source (default: METERS_METER_SOURCE_PATH)",
)


def _load_lookup(source: str | None):
    from meters.lookup import MeterSourceError, create_lookup

    try:
        return create_lookup(source or settings.meter_source_path)
    except MeterSourceError as e:
        logger.error("Failed to load meters", error=str(e))
        click.echo(f"✗ Error loading meters: {e}", err=True)
        sys.exit(1)


def _echo_meter(meter) -> None:
    click.echo(f"  ID: {meter.id}")
    for label, value in (
        ("Name", meter.name),
        ("Location", meter.location),
        ("Unit", meter.unit),
        ("Author", meter.author_id),
    ):
        if value is not None:
            click.echo(f"  {label}: {value}")


@click.group()
@click.version_option(version=__version__, prog_name="meters")
def cli() -> None:
    """Meters CLI - run the GraphQL server and inspect meter sources."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@source_option
def serve(host: str, port: int, reload: bool, log_level: str, source: str | None) -> None:
    """Start the Meters API server."""

    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Meters API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # A reloading server re-imports the app in a child process, so settings
    # travel through the environment as well as the in-process singleton
    if log_level == "debug":
        os.environ["METERS_DEBUG"] = "true"
    else:
        os.environ.setdefault("METERS_DEBUG", "false")
    os.environ["METERS_LOG_LEVEL"] = log_level
    if source:
        os.environ["METERS_METER_SOURCE_PATH"] = source

    settings.debug = os.environ["METERS_DEBUG"].lower() in ("1", "true", "yes")
    settings.log_level = log_level
    if source:
        settings.meter_source_path = source

    try:
        if reload:
            uvicorn.run(
                "meters.api.app:app",
                host=host,
                port=port,
                reload=True,
                log_level=log_level,
                access_log=True,
            )
        else:
            from meters.api.app import create_app
            from meters.lookup import create_lookup

            app = create_app(create_lookup(settings.meter_source_path))
            uvicorn.run(
                app,
                host=host,
                port=port,
                log_level=log_level,
                access_log=True,
            )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        click.echo(f"✗ Server startup failed: {e}", err=True)
        sys.exit(1)


@cli.command("list")
@source_option
def list_meters(source: str | None) -> None:
    """List all meters in the meter source."""
    configure_logging()

    meters = _load_lookup(source).get_all()
    if not meters:
        click.echo("No meters found.")
        return

    click.echo(f"Found {len(meters)} meter(s):")
    click.echo()
    for meter in meters:
        _echo_meter(meter)
        click.echo()


@cli.command("show")
@click.argument("meter_id")
@source_option
def show_meter(meter_id: str, source: str | None) -> None:
    """Show a single meter by ID."""
    configure_logging()

    meter = _load_lookup(source).get_by_id(meter_id)
    if meter is None:
        click.echo(f"✗ Meter '{meter_id}' not found", err=True)
        sys.exit(1)

    _echo_meter(meter)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
