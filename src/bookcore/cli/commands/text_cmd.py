# ABOUTME: The `bookcore text` command that prints a book's normalized plain text.
# ABOUTME: Useful for checking what the reader will actually display.

from pathlib import Path

import click

from bookcore.cli.options import resolve_format, type_option
from bookcore.core.dispatch import parse_book
from bookcore.errors import BookParseError


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@type_option
def text(path: Path, declared_type: str | None) -> None:
    """Print the plain-text content parsed from a book file."""
    fmt = resolve_format(path, declared_type)
    try:
        book = parse_book(path.read_bytes(), fmt, filename=path.name)
    except BookParseError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc

    click.echo(book.content.rstrip("\n"))
