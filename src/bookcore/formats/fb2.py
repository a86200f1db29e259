# ABOUTME: FictionBook (FB2) parsing, for raw XML or a zip-wrapped .fb2 entry.
# ABOUTME: Flattens the nested section tree depth-first into an ordered chapter list.

import logging

from bookcore.errors import EmptyExtractionError, InvalidFb2RootError, NoFb2EntryFoundError
from bookcore.formats.archive import open_archive
from bookcore.formats.xmltree import XmlNode, as_list, parse_xml
from bookcore.pagination import estimate_pages
from bookcore.types import BookChapter, BookMetadata, Fb2Section, ParsedBook

logger = logging.getLogger(__name__)

FB2_ROOT_NAMES = frozenset({"FictionBook", "fiction-book"})

# Bodies holding footnotes or comments rather than reading text
_AUXILIARY_BODIES = frozenset({"notes", "comments"})


def _read_payload(data: bytes, zip_wrapped: bool) -> tuple[bytes, str]:
    """Return the FB2 document bytes and a label for error messages."""
    if not zip_wrapped:
        return data, "<fb2>"
    with open_archive(data) as archive:
        entry = archive.find_first(lambda name: name.lower().endswith(".fb2"))
        if entry is None:
            raise NoFb2EntryFoundError("No FB2 file found in archive")
        logger.debug("Reading FB2 entry %s from archive", entry)
        return archive.read_bytes(entry), entry


def _person_name(author: XmlNode) -> str:
    parts = [author.first("first-name"), author.first("last-name")]
    return " ".join(part.text_content() for part in parts if part is not None).strip()


def _title_text(title: XmlNode) -> str:
    """FB2 titles are usually several <p> lines; join them with spaces."""
    lines = [p.text_content() for p in title.children_named("p")]
    text = " ".join(line for line in lines if line)
    return text or title.text_content()


def _child_text(parent: XmlNode | None, name: str) -> str | None:
    node = parent.first(name) if parent is not None else None
    if node is None:
        return None
    return node.text_content() or None


def _read_metadata(fiction_book: XmlNode) -> BookMetadata:
    title_info = fiction_book.find_path("description", "title-info")
    publish_info = fiction_book.find_path("description", "publish-info")
    if title_info is None:
        return BookMetadata(
            publisher=_child_text(publish_info, "publisher"),
            publish_date=_child_text(publish_info, "year"),
        )

    names = [_person_name(author) for author in as_list(title_info.get("author"))]
    author = ", ".join(name for name in names if name)

    return BookMetadata(
        title=_child_text(title_info, "book-title") or "Untitled",
        author=author or "Unknown Author",
        description=_child_text(title_info, "annotation"),
        language=_child_text(title_info, "lang") or title_info.attr("lang"),
        publisher=_child_text(publish_info, "publisher"),
        publish_date=_child_text(publish_info, "year"),
    )


def _flatten(section: XmlNode, out: list[Fb2Section]) -> None:
    """Depth-first, pre-order: the section itself, then its subsections."""
    title_node = section.first("title")
    title = _title_text(title_node) if title_node is not None else None
    paragraphs = [p.text_content() for p in as_list(section.get("p"))]
    paragraphs = [p for p in paragraphs if p]

    if title or paragraphs:
        out.append(Fb2Section(title=title or None, paragraphs=paragraphs))

    for subsection in as_list(section.get("section")):
        _flatten(subsection, out)


def flatten_body(body: XmlNode) -> list[Fb2Section]:
    """Flatten one <body> into sections in reading order.

    A body without <section> children is treated as a single section.
    """
    sections: list[Fb2Section] = []
    top_level = as_list(body.get("section"))
    if top_level:
        for section in top_level:
            _flatten(section, sections)
    else:
        _flatten(body, sections)
    return sections


def parse_fb2(data: bytes, zip_wrapped: bool = False) -> ParsedBook:
    """Parse FB2 bytes (optionally zip-wrapped) into a ParsedBook.

    Raises:
        ArchiveCorruptError: If zip_wrapped and the bytes are not a readable zip.
        NoFb2EntryFoundError: If the archive holds no .fb2 entry.
        XmlMalformedError: If the document is not XML.
        InvalidFb2RootError: If the root element is not FictionBook.
        EmptyExtractionError: If the body yields no text.
    """
    payload, label = _read_payload(data, zip_wrapped)
    fiction_book = parse_xml(payload, name=label)
    if fiction_book.name not in FB2_ROOT_NAMES:
        raise InvalidFb2RootError(fiction_book.name)

    metadata = _read_metadata(fiction_book)

    sections: list[Fb2Section] = []
    for body in fiction_book.children_named("body"):
        if body.attr("name") in _AUXILIARY_BODIES:
            continue
        sections.extend(flatten_body(body))

    chapters = tuple(
        BookChapter(
            id=f"section-{index}",
            title=section.title or f"Chapter {index + 1}",
            href="",
            order=index,
        )
        for index, section in enumerate(sections)
    )
    content = "\n\n".join(section.content for section in sections)
    if not content.strip():
        raise EmptyExtractionError(f"FB2 yielded no text ({len(sections)} sections)")

    logger.debug("FB2 parsed: %d chapters", len(chapters))
    return ParsedBook(
        metadata=metadata,
        chapters=chapters,
        content=content,
        toc=chapters,
        total_pages=estimate_pages(len(content)),
    )
