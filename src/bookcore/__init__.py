# ABOUTME: bookcore turns EPUB, FB2, and plain-text books into one normalized document model.
# ABOUTME: Exports the parse entry points, the result types, and the error taxonomy.

from bookcore.core.dispatch import (
    BookFormat,
    detect_format,
    extract_book_metadata,
    parse_book,
    parse_book_async,
)
from bookcore.errors import (
    ArchiveCorruptError,
    BookParseError,
    EmptyExtractionError,
    EntryMissingError,
    EntryUndecodableError,
    InvalidFb2RootError,
    MissingRootfileError,
    NoFb2EntryFoundError,
    UnsupportedTypeError,
    XmlMalformedError,
)
from bookcore.pagination import CHARS_PER_PAGE, estimate_pages
from bookcore.types import BookChapter, BookMetadata, ParsedBook

__all__ = [
    "CHARS_PER_PAGE",
    "ArchiveCorruptError",
    "BookChapter",
    "BookFormat",
    "BookMetadata",
    "BookParseError",
    "EmptyExtractionError",
    "EntryMissingError",
    "EntryUndecodableError",
    "InvalidFb2RootError",
    "MissingRootfileError",
    "NoFb2EntryFoundError",
    "ParsedBook",
    "UnsupportedTypeError",
    "XmlMalformedError",
    "detect_format",
    "estimate_pages",
    "extract_book_metadata",
    "parse_book",
    "parse_book_async",
]
