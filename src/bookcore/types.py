# ABOUTME: Normalized document model produced by every format parser.
# ABOUTME: ParsedBook is the render-agnostic value handed to the rest of the application.

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class BookMetadata:
    """Descriptive metadata for a parsed book.

    Title and author always hold something displayable; the remaining
    fields are None when the source does not carry them.
    """

    title: str = "Untitled"
    author: str = "Unknown Author"
    description: str | None = None
    language: str | None = None
    publisher: str | None = None
    publish_date: str | None = None


@dataclass(frozen=True)
class BookChapter:
    """One entry in the reading order."""

    id: str
    title: str
    href: str
    order: int


@dataclass(frozen=True)
class ParsedBook:
    """Complete result of a successful parse.

    Attributes:
        metadata: Descriptive fields for the book.
        chapters: Chapters in document traversal order.
        content: Plain-text body, chapter texts separated by blank lines.
        toc: Table of contents; equal to chapters for EPUB and FB2.
        total_pages: Page-count estimate, at least 1.
        skipped_items: EPUB spine items dropped because they could not be resolved.
    """

    metadata: BookMetadata
    chapters: tuple[BookChapter, ...]
    content: str
    toc: tuple[BookChapter, ...]
    total_pages: int
    skipped_items: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Plain key-value form with lists in place of tuples."""
        data = asdict(self)
        data["chapters"] = list(data["chapters"])
        data["toc"] = list(data["toc"])
        return data


@dataclass
class Fb2Section:
    """A flattened FB2 section, alive only while the chapter list is built."""

    title: str | None = None
    paragraphs: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n\n".join(self.paragraphs)
