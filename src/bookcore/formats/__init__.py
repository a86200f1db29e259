# ABOUTME: Format-specific parsers and the shared archive, XML, and HTML helpers they build on.
# ABOUTME: Each parser turns raw bytes into a ParsedBook or raises a BookParseError.

from bookcore.formats.epub import parse_epub
from bookcore.formats.fb2 import parse_fb2
from bookcore.formats.plain import parse_txt, pdf_stub

__all__ = [
    "parse_epub",
    "parse_fb2",
    "parse_txt",
    "pdf_stub",
]
