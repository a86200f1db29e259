# ABOUTME: Shared pytest fixtures for bookcore tests.
# ABOUTME: Builds EPUB archives and FB2 documents in memory, plus an ebooklib-written EPUB.

from pathlib import Path

import pytest
from ebooklib import epub

from tests.fixtures.builders import (
    EpubBuilder,
    fb2_document,
    make_epub,
    xhtml,
    zip_bytes,
)


@pytest.fixture
def build_epub() -> EpubBuilder:
    """Factory that assembles EPUB bytes from chapter documents."""
    return make_epub


@pytest.fixture
def two_chapter_epub() -> bytes:
    """EPUB with two spine items under OEBPS/."""
    return make_epub(
        {
            "ch1.xhtml": xhtml("<h1>Intro</h1><p>Hello</p>"),
            "ch2.xhtml": xhtml("<h1>Middle</h1><p>World</p>"),
        }
    )


@pytest.fixture
def sample_fb2() -> bytes:
    """FB2 with a section holding two subsections, followed by a sibling section."""
    return fb2_document()


@pytest.fixture
def zipped_fb2(sample_fb2: bytes) -> bytes:
    """The sample FB2 wrapped in a zip archive."""
    return zip_bytes({"roadside_picnic.fb2": sample_fb2})


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Create a minimal valid EPUB file with known metadata using ebooklib."""
    book = epub.EpubBook()

    book.set_identifier("test-isbn-978-0-123456-47-2")
    book.set_title("The Name of the Rose")
    book.set_language("en")
    book.add_author("Umberto Eco")

    book.add_metadata("DC", "publisher", "Harcourt")
    book.add_metadata("DC", "description", "A mystery set in a medieval monastery.")

    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    filepath = tmp_path / "name_of_the_rose.epub"
    epub.write_epub(str(filepath), book)
    return filepath


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath
