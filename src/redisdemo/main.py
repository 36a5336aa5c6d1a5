"""CLI handling for redisdemo.

This module provides the command-line interface for redisdemo, handling
argument parsing via click, logging configuration, settings loading and
running the scripted demo against the configured Redis server.

Usage:
    redisdemo [--url URL] [--env-file PATH] [--verbose]
"""

import click
import sys

from redisdemo.main_logging import configure_logging


@click.command()
@click.option(
    "--url",
    default=None,
    help="Redis URL (overrides REDIS_URL)",
)
@click.option(
    "--env-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Load environment variables from this .env file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
def main(url: str | None, env_file: str | None, verbose: bool) -> None:
    """Run a scripted demo of string, hash and list commands against Redis."""
    configure_logging(verbose)

    from redisdemo.settings import load_settings

    settings = load_settings(env_file=env_file, url=url)

    click.echo("Starting Redis demo")
    click.echo("===================")
    _run_demo(settings)
    click.echo("\nApplication completed successfully")


def _run_demo(settings) -> None:
    """Run the demo, exiting with status 1 on a terminal connection failure.

    Args:
        settings: RedisSettings for the server to use.
    """
    import asyncio
    from redisdemo.demo import demonstrate_operations
    from redisdemo.manager import RedisManager

    try:
        asyncio.run(demonstrate_operations(RedisManager(settings)))
    except ConnectionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
