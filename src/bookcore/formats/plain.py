# ABOUTME: Plain-text parsing and the PDF placeholder result.
# ABOUTME: PDF pages are rendered by an external viewer, so only a stub book is produced here.

import logging

from bookcore.errors import EmptyExtractionError, EntryUndecodableError
from bookcore.pagination import estimate_pages
from bookcore.types import BookChapter, BookMetadata, ParsedBook

logger = logging.getLogger(__name__)

DEFAULT_PDF_PAGES = 10
PDF_PLACEHOLDER_CONTENT = "PDF content will be rendered using PDF viewer component."


def parse_txt(data: bytes) -> ParsedBook:
    """Parse a UTF-8 text file; the first non-blank line doubles as the title.

    Raises:
        EntryUndecodableError: If the bytes are not UTF-8.
        EmptyExtractionError: If the text is empty or whitespace only.
    """
    try:
        content = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise EntryUndecodableError("<text>", str(exc)) from exc

    if not content.strip():
        raise EmptyExtractionError("Text file is empty")

    title = next((line.strip() for line in content.splitlines() if line.strip()), "Untitled")
    return ParsedBook(
        metadata=BookMetadata(title=title),
        chapters=(BookChapter(id="main", title="Full Text", href="", order=0),),
        content=content,
        toc=(),
        total_pages=estimate_pages(len(content)),
    )


def pdf_stub(page_hint: int | None = None) -> ParsedBook:
    """Placeholder book for a PDF; page_hint comes from the viewer when it knows the count."""
    pages = page_hint if page_hint is not None and page_hint > 0 else DEFAULT_PDF_PAGES
    logger.debug("Returning PDF stub with %d pages", pages)
    return ParsedBook(
        metadata=BookMetadata(title="PDF Document"),
        chapters=(),
        content=PDF_PLACEHOLDER_CONTENT,
        toc=(),
        total_pages=pages,
    )
