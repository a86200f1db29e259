# ABOUTME: Single entry point that routes raw book bytes to the right format parser.
# ABOUTME: Also provides format detection from filenames, an async wrapper, and a metadata-only helper.

import asyncio
import logging
from enum import Enum
from typing import BinaryIO

from bookcore.errors import BookParseError, UnsupportedTypeError
from bookcore.formats import parse_epub, parse_fb2, parse_txt, pdf_stub
from bookcore.types import BookMetadata, ParsedBook

logger = logging.getLogger(__name__)

_ZIP_MAGIC = b"PK\x03\x04"


class BookFormat(str, Enum):
    """Declared format tags accepted by parse_book."""

    EPUB = "epub"
    FB2 = "fb2"
    TXT = "txt"
    PDF = "pdf"


# Longest suffixes first so ".fb2.zip" wins over ".zip"
_SUFFIX_FORMATS: tuple[tuple[str, BookFormat], ...] = (
    (".fb2.zip", BookFormat.FB2),
    (".epub", BookFormat.EPUB),
    (".fb2", BookFormat.FB2),
    (".fbz", BookFormat.FB2),
    (".txt", BookFormat.TXT),
    (".pdf", BookFormat.PDF),
)

_ZIPPED_FB2_SUFFIXES = (".zip", ".fbz")


def detect_format(filename: str) -> BookFormat | None:
    """Guess the format from a filename's suffix, or None if unrecognized."""
    lowered = filename.lower()
    for suffix, fmt in _SUFFIX_FORMATS:
        if lowered.endswith(suffix):
            return fmt
    return None


def is_zip_wrapped(filename: str | None, data: bytes) -> bool:
    """Whether FB2 content arrives inside a zip archive.

    The filename suffix decides when given; otherwise the zip magic bytes do.
    """
    if filename and filename.lower().endswith(_ZIPPED_FB2_SUFFIXES):
        return True
    return data.startswith(_ZIP_MAGIC)


def _coerce_format(declared_type: str | BookFormat) -> BookFormat:
    if isinstance(declared_type, BookFormat):
        return declared_type
    try:
        return BookFormat(str(declared_type).strip().lower())
    except ValueError as exc:
        raise UnsupportedTypeError(str(declared_type)) from exc


def _read_source(source: bytes | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.read()


def parse_book(
    source: bytes | BinaryIO,
    declared_type: str | BookFormat,
    *,
    zip_wrapped: bool | None = None,
    filename: str | None = None,
    page_hint: int | None = None,
) -> ParsedBook:
    """Parse a book of the declared format into a ParsedBook.

    Args:
        source: Raw bytes, or a binary stream that is read to the end.
        declared_type: One of "epub", "fb2", "txt", "pdf" (or a BookFormat).
        zip_wrapped: FB2 only. When None, inferred from filename and magic bytes.
        filename: Optional original filename, used only as a hint.
        page_hint: PDF only. Page count reported by the external viewer.

    Returns:
        The normalized book.

    Raises:
        UnsupportedTypeError: If declared_type is not a known format.
        BookParseError: Any other fatal failure from the format parser.
    """
    fmt = _coerce_format(declared_type)
    if fmt is BookFormat.PDF:
        return pdf_stub(page_hint)

    data = _read_source(source)
    logger.debug("Parsing %s (%d bytes)", fmt.value, len(data))

    if fmt is BookFormat.EPUB:
        return parse_epub(data)
    if fmt is BookFormat.FB2:
        if zip_wrapped is None:
            zip_wrapped = is_zip_wrapped(filename, data)
        return parse_fb2(data, zip_wrapped=zip_wrapped)
    return parse_txt(data)


async def parse_book_async(
    source: bytes | BinaryIO,
    declared_type: str | BookFormat,
    *,
    zip_wrapped: bool | None = None,
    filename: str | None = None,
    page_hint: int | None = None,
) -> ParsedBook:
    """Run parse_book on a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(
        parse_book,
        source,
        declared_type,
        zip_wrapped=zip_wrapped,
        filename=filename,
        page_hint=page_hint,
    )


def extract_book_metadata(
    source: bytes | BinaryIO,
    declared_type: str | BookFormat,
    *,
    zip_wrapped: bool | None = None,
    filename: str | None = None,
) -> BookMetadata:
    """Return just the metadata, falling back to placeholders if the parse fails."""
    try:
        return parse_book(
            source, declared_type, zip_wrapped=zip_wrapped, filename=filename
        ).metadata
    except BookParseError as exc:
        logger.warning("Metadata extraction failed for %s: %s", filename or declared_type, exc)
        return BookMetadata(title="Unknown Title", author="Unknown Author")
