# ABOUTME: The `bookcore inspect` command for viewing a parsed book's structure.
# ABOUTME: Shows metadata, page estimate, and the chapter list for a single file.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from bookcore.cli.options import resolve_format, type_option
from bookcore.core.dispatch import parse_book
from bookcore.errors import BookParseError

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@type_option
@click.option(
    "--page-hint",
    type=int,
    default=None,
    help="Page count to report for PDF files.",
)
def inspect(path: Path, declared_type: str | None, page_hint: int | None) -> None:
    """Show metadata and chapters parsed from a book file."""
    fmt = resolve_format(path, declared_type)
    try:
        book = parse_book(path.read_bytes(), fmt, filename=path.name, page_hint=page_hint)
    except BookParseError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    meta = book.metadata
    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", meta.title)
    table.add_row("Author", meta.author)
    table.add_row("Language", meta.language or "[dim]unknown[/dim]")
    table.add_row("Publisher", meta.publisher or "[dim]unknown[/dim]")
    table.add_row("Published", meta.publish_date or "[dim]unknown[/dim]")
    table.add_row("Description", meta.description or "[dim]none[/dim]")
    table.add_row("Pages", str(book.total_pages))
    if book.skipped_items:
        table.add_row("Skipped", f"[yellow]{book.skipped_items} unreadable item(s)[/yellow]")
    console.print(table)

    if not book.chapters:
        return

    chapters = Table(title="Chapters")
    chapters.add_column("#", style="dim", width=4)
    chapters.add_column("Title", style="bold")
    chapters.add_column("Href", style="dim")
    for chapter in book.chapters:
        chapters.add_row(str(chapter.order), chapter.title, chapter.href)
    console.print(chapters)
