# ABOUTME: CLI package for bookcore, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from bookcore.cli.commands import inspect_cmd, text_cmd


@click.group()
@click.version_option(package_name="bookcore")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """bookcore - parse EPUB, FB2, and text books into plain reading text."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )


cli.add_command(inspect_cmd.inspect)
cli.add_command(text_cmd.text)
