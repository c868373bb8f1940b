"""Command-line interface for bootci using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click

from bootci import __version__


@click.group()
@click.version_option(version=__version__)
@click.option(
    "log_level",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """bootci: bootstrap confidence intervals for means, medians, and proportions."""

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Register subcommands
from bootci.commands.ci import ci  # noqa: E402
from bootci.commands.coverage import coverage  # noqa: E402

cli.add_command(ci)
cli.add_command(coverage)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
