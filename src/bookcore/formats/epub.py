# ABOUTME: EPUB parsing: container.xml -> OPF package -> spine-ordered chapter text.
# ABOUTME: Unreadable spine items are skipped and counted; structural failures raise typed errors.

import logging
import posixpath
from dataclasses import dataclass
from urllib.parse import unquote

from bookcore.errors import (
    EmptyExtractionError,
    EntryMissingError,
    EntryUndecodableError,
    MissingRootfileError,
)
from bookcore.formats.archive import Archive, open_archive
from bookcore.formats.html_text import extract_text, extract_title
from bookcore.formats.xmltree import XmlNode, as_list, parse_xml
from bookcore.pagination import estimate_pages
from bookcore.types import BookChapter, BookMetadata, ParsedBook

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"


@dataclass(frozen=True)
class _ManifestItem:
    id: str
    href: str


def _metadata_value(metadata: XmlNode | None, name: str) -> str | None:
    """Text of a Dublin Core field; repeated fields are joined with ', '."""
    if metadata is None:
        return None
    values = [node.text_content() for node in as_list(metadata.get(name))]
    values = [value for value in values if value]
    return ", ".join(values) if values else None


def _read_metadata(package: XmlNode) -> BookMetadata:
    metadata = package.first("metadata")
    return BookMetadata(
        title=_metadata_value(metadata, "title") or "Untitled",
        author=_metadata_value(metadata, "creator") or "Unknown Author",
        description=_metadata_value(metadata, "description"),
        language=_metadata_value(metadata, "language"),
        publisher=_metadata_value(metadata, "publisher"),
        publish_date=_metadata_value(metadata, "date"),
    )


def _find_rootfile(archive: Archive) -> str:
    """Read container.xml and return the package document path."""
    try:
        container_bytes = archive.read_bytes(CONTAINER_PATH)
    except EntryMissingError as exc:
        raise MissingRootfileError(CONTAINER_PATH, "missing container.xml") from exc

    container = parse_xml(container_bytes, name=CONTAINER_PATH)
    rootfiles = container.first("rootfiles")
    candidates = as_list(rootfiles.get("rootfile")) if rootfiles is not None else []
    for rootfile in candidates:
        full_path = rootfile.attr("full-path")
        if full_path:
            return full_path
    raise MissingRootfileError(CONTAINER_PATH, "cannot find rootfile path")


def _read_manifest(package: XmlNode) -> dict[str, _ManifestItem]:
    manifest = package.first("manifest")
    items: dict[str, _ManifestItem] = {}
    if manifest is None:
        return items
    for node in as_list(manifest.get("item")):
        item_id = node.attr("id")
        href = node.attr("href")
        if item_id and href and item_id not in items:
            items[item_id] = _ManifestItem(id=item_id, href=href)
    return items


def _read_spine(package: XmlNode) -> list[str]:
    spine = package.first("spine")
    if spine is None:
        return []
    return [node.attr("idref", "") for node in as_list(spine.get("itemref"))]


def _unique_id(idref: str, used: set[str]) -> str:
    """Chapter id for a spine entry; a repeated idref gets a numeric suffix."""
    candidate = idref
    suffix = 2
    while candidate in used:
        candidate = f"{idref}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _resolve_href(base_path: str, href: str) -> str:
    """Turn a manifest href into an archive entry path."""
    path = unquote(href.split("#", 1)[0])
    joined = base_path + path
    normalized = posixpath.normpath(joined)
    return normalized if normalized != "." else joined


def parse_epub(data: bytes) -> ParsedBook:
    """Parse EPUB bytes into a ParsedBook.

    Spine order is authoritative. A spine item whose idref is not in the
    manifest, or whose target entry is missing or undecodable, is skipped
    and counted in ``skipped_items`` rather than aborting the parse.

    Raises:
        ArchiveCorruptError: If the bytes are not a readable zip archive.
        MissingRootfileError: If container.xml or its rootfile path is absent.
        EntryMissingError: If the package document itself is absent.
        XmlMalformedError: If container.xml or the package document is not XML.
        EmptyExtractionError: If no spine item yields any text.
    """
    with open_archive(data) as archive:
        rootfile_path = _find_rootfile(archive)
        logger.debug("EPUB rootfile: %s", rootfile_path)

        package = parse_xml(archive.read_bytes(rootfile_path), name=rootfile_path)
        metadata = _read_metadata(package)
        manifest = _read_manifest(package)
        spine = _read_spine(package)

        base_path = rootfile_path.rsplit("/", 1)[0] + "/" if "/" in rootfile_path else ""

        chapters: list[BookChapter] = []
        parts: list[str] = []
        skipped = 0
        used_ids: set[str] = set()

        for index, idref in enumerate(spine):
            item = manifest.get(idref)
            if item is None:
                logger.warning("Spine idref %r not found in manifest, skipping", idref)
                skipped += 1
                continue

            entry_path = _resolve_href(base_path, item.href)
            try:
                html = archive.read_text(entry_path)
            except (EntryMissingError, EntryUndecodableError) as exc:
                logger.warning("Skipping spine item %s: %s", idref, exc)
                skipped += 1
                continue

            parts.append(extract_text(html) + "\n\n")
            chapters.append(
                BookChapter(
                    id=_unique_id(idref, used_ids),
                    title=extract_title(html) or f"Chapter {index + 1}",
                    href=item.href,
                    order=len(chapters),
                )
            )

    content = "".join(parts)
    if not content.strip():
        raise EmptyExtractionError(
            f"EPUB yielded no text ({len(spine)} spine items, {skipped} skipped)"
        )

    logger.debug("EPUB parsed: %d chapters, %d skipped", len(chapters), skipped)
    chapter_tuple = tuple(chapters)
    return ParsedBook(
        metadata=metadata,
        chapters=chapter_tuple,
        content=content,
        toc=chapter_tuple,
        total_pages=estimate_pages(len(content)),
        skipped_items=skipped,
    )
