# ABOUTME: CLI package for Bookmeld, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookmeld.cli.commands import isbn_cmd, resolve_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(package_name="bookmeld")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Bookmeld - resolve book metadata from Google Books and Open Library."""
    _configure_logging(verbose)


cli.add_command(resolve_cmd.resolve)
cli.add_command(isbn_cmd.isbn)
