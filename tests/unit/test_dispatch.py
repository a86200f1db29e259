# ABOUTME: Unit tests for the parse_book dispatch facade and format detection.
# ABOUTME: Covers routing by declared type, FB2 zip inference, streams, async, and metadata fallback.

import asyncio
import io

import pytest

from bookcore import (
    BookFormat,
    UnsupportedTypeError,
    detect_format,
    extract_book_metadata,
    parse_book,
    parse_book_async,
)
from bookcore.core.dispatch import is_zip_wrapped
from bookcore.formats.plain import PDF_PLACEHOLDER_CONTENT


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("book.epub", BookFormat.EPUB),
            ("BOOK.EPUB", BookFormat.EPUB),
            ("book.fb2", BookFormat.FB2),
            ("book.fb2.zip", BookFormat.FB2),
            ("book.fbz", BookFormat.FB2),
            ("notes.txt", BookFormat.TXT),
            ("scan.pdf", BookFormat.PDF),
        ],
    )
    def test_known_suffixes(self, filename: str, expected: BookFormat) -> None:
        assert detect_format(filename) is expected

    def test_unknown_suffix(self) -> None:
        assert detect_format("book.mobi") is None
        assert detect_format("archive.zip") is None


class TestIsZipWrapped:
    """Tests for is_zip_wrapped."""

    def test_suffix_decides(self) -> None:
        assert is_zip_wrapped("book.fb2.zip", b"<FictionBook/>")
        assert is_zip_wrapped("book.fbz", b"")

    def test_magic_bytes_without_filename(self, zipped_fb2: bytes) -> None:
        assert is_zip_wrapped(None, zipped_fb2)

    def test_plain_xml(self, sample_fb2: bytes) -> None:
        assert not is_zip_wrapped("book.fb2", sample_fb2)


class TestParseBook:
    """Tests for routing through parse_book."""

    def test_routes_epub(self, two_chapter_epub: bytes) -> None:
        book = parse_book(two_chapter_epub, "epub")
        assert [c.title for c in book.chapters] == ["Intro", "Middle"]

    def test_accepts_enum_and_mixed_case(self, two_chapter_epub: bytes) -> None:
        assert parse_book(two_chapter_epub, BookFormat.EPUB).chapters
        assert parse_book(two_chapter_epub, " EPUB ").chapters

    def test_accepts_stream(self, two_chapter_epub: bytes) -> None:
        book = parse_book(io.BytesIO(two_chapter_epub), "epub")
        assert len(book.chapters) == 2

    def test_routes_raw_fb2(self, sample_fb2: bytes) -> None:
        assert parse_book(sample_fb2, "fb2").metadata.title == "Roadside Picnic"

    def test_fb2_zip_inferred_from_bytes(self, zipped_fb2: bytes) -> None:
        assert parse_book(zipped_fb2, "fb2").metadata.title == "Roadside Picnic"

    def test_fb2_zip_inferred_from_filename(self, zipped_fb2: bytes) -> None:
        book = parse_book(zipped_fb2, "fb2", filename="roadside.fb2.zip")
        assert len(book.chapters) == 4

    def test_fb2_explicit_flag(self, zipped_fb2: bytes) -> None:
        assert parse_book(zipped_fb2, "fb2", zip_wrapped=True).chapters

    def test_routes_txt(self) -> None:
        book = parse_book(b"Title line\nBody", "txt")
        assert book.metadata.title == "Title line"

    def test_routes_pdf_stub(self) -> None:
        book = parse_book(b"%PDF-1.7", "pdf", page_hint=42)
        assert book.content == PDF_PLACEHOLDER_CONTENT
        assert book.total_pages == 42

    def test_unsupported_type(self) -> None:
        with pytest.raises(UnsupportedTypeError) as excinfo:
            parse_book(b"data", "mobi")
        assert excinfo.value.declared_type == "mobi"


class TestParseBookAsync:
    """Tests for parse_book_async."""

    def test_returns_same_result(self, two_chapter_epub: bytes) -> None:
        book = asyncio.run(parse_book_async(two_chapter_epub, "epub"))
        assert book == parse_book(two_chapter_epub, "epub")

    def test_propagates_failures(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            asyncio.run(parse_book_async(b"x", "doc"))


class TestExtractBookMetadata:
    """Tests for extract_book_metadata."""

    def test_returns_metadata(self, sample_fb2: bytes) -> None:
        meta = extract_book_metadata(sample_fb2, "fb2")
        assert meta.author == "Arkady Strugatsky"

    def test_falls_back_on_failure(self) -> None:
        meta = extract_book_metadata(b"not a zip", "epub")
        assert meta.title == "Unknown Title"
        assert meta.author == "Unknown Author"
