# ABOUTME: Regex-based HTML/XHTML to plain-text conversion for chapter documents.
# ABOUTME: Drops style/script blocks and tags, decodes a fixed entity set, and collapses whitespace.

import re

_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_NUMERIC_ENTITY_RE = re.compile(r"&#(\d+);")
_WHITESPACE_RE = re.compile(r"\s+")
_H1_RE = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)

# Applied in this order; anything else that looks like an entity is left alone.
_NAMED_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def _decode_numeric(match: re.Match[str]) -> str:
    code_point = int(match.group(1))
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def extract_text(html: str) -> str:
    """Convert an HTML fragment or document to a single line of plain text.

    Tags become spaces so adjacent block elements do not run together.
    """
    text = _STYLE_RE.sub("", html)
    text = _SCRIPT_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    for entity, replacement in _NAMED_ENTITIES:
        text = text.replace(entity, replacement)
    text = _NUMERIC_ENTITY_RE.sub(_decode_numeric, text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def extract_title(html: str) -> str | None:
    """Return a chapter-title hint: the first <h1>, else the first <title>.

    An <h1> that is present but empty yields None without consulting <title>.
    """
    match = _H1_RE.search(html) or _TITLE_RE.search(html)
    if match is None:
        return None
    return extract_text(match.group(1)) or None
