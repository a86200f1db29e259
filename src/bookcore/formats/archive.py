# ABOUTME: Zip archive access for EPUB and zipped FB2 containers.
# ABOUTME: Wraps zipfile with exact-path lookup and typed errors for missing or undecodable entries.

import codecs
import io
import logging
import re
import zipfile
import zlib
from collections.abc import Callable

from bookcore.errors import ArchiveCorruptError, EntryMissingError, EntryUndecodableError

logger = logging.getLogger(__name__)

_BOM_ENCODINGS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)

# BOM-less UTF-16 documents that open with "<?"
_UTF16_PREFIXES = (
    (b"<\x00?\x00", "utf-16-le"),
    (b"\x00<\x00?", "utf-16-be"),
)

_XML_ENCODING_RE = re.compile(rb"""\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']""")


def sniff_encoding(data: bytes) -> str:
    """Pick a text encoding from the byte-order mark or the XML declaration.

    Falls back to UTF-8 when neither is present.
    """
    for bom, encoding in _BOM_ENCODINGS:
        if data.startswith(bom):
            return encoding
    for prefix, encoding in _UTF16_PREFIXES:
        if data.startswith(prefix):
            return encoding
    match = _XML_ENCODING_RE.match(data, 0, 256)
    if match:
        return match.group(1).decode("ascii")
    return "utf-8"


class Archive:
    """An opened zip archive held entirely in memory.

    Use as a context manager so the underlying ZipFile is closed once the
    parse is done.
    """

    def __init__(self, zf: zipfile.ZipFile) -> None:
        self._zf = zf

    def __enter__(self) -> "Archive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._zf.close()

    def names(self) -> list[str]:
        """Entry names in central-directory order, directories excluded."""
        return [name for name in self._zf.namelist() if not name.endswith("/")]

    def has_entry(self, path: str) -> bool:
        try:
            self._zf.getinfo(path)
        except KeyError:
            return False
        return True

    def find_first(self, predicate: Callable[[str], bool]) -> str | None:
        """Return the first entry name accepted by predicate, or None."""
        return next((name for name in self.names() if predicate(name)), None)

    def read_bytes(self, path: str) -> bytes:
        """Read an entry's raw bytes.

        Raises:
            EntryMissingError: If no entry has exactly this path.
            EntryUndecodableError: If the entry cannot be decompressed.
        """
        try:
            return self._zf.read(path)
        except KeyError as exc:
            raise EntryMissingError(path) from exc
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, EOFError) as exc:
            raise EntryUndecodableError(path, str(exc)) from exc

    def read_text(self, path: str) -> str:
        """Read an entry and decode it as text.

        The encoding comes from a byte-order mark or an XML declaration,
        defaulting to UTF-8. A leading BOM is dropped.

        Raises:
            EntryMissingError: If no entry has exactly this path.
            EntryUndecodableError: If the bytes do not decode in that encoding.
        """
        data = self.read_bytes(path)
        encoding = sniff_encoding(data)
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise EntryUndecodableError(path, str(exc)) from exc


def open_archive(data: bytes) -> Archive:
    """Open zip bytes as an Archive.

    Raises:
        ArchiveCorruptError: If the central directory cannot be read.
    """
    try:
        zf = zipfile.ZipFile(io.BytesIO(data), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, EOFError) as exc:
        raise ArchiveCorruptError(f"Cannot open archive: {exc}") from exc
    logger.debug("Opened archive with %d entries", len(zf.namelist()))
    return Archive(zf)
