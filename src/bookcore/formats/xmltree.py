# ABOUTME: Generic XML tree reader built on lxml.
# ABOUTME: Exposes elements, @_-prefixed attributes, and #text uniformly, with as_list for cardinality.

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from lxml import etree

from bookcore.errors import XmlMalformedError

logger = logging.getLogger(__name__)

ATTR_PREFIX = "@_"
TEXT_KEY = "#text"

Lookup = Union["XmlNode", list["XmlNode"], str, None]


@dataclass(frozen=True)
class XmlNode:
    """A read-only element with namespace-free names.

    Children are kept in document order. ``text`` holds the element's own
    character data (not that of its descendants), stripped.
    """

    name: str
    attributes: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    children: tuple[XmlNode, ...] = ()
    text: str = ""
    _head: str = field(default="", repr=False)
    _tail: str = field(default="", repr=False)

    def get(self, key: str) -> Lookup:
        """Look up an attribute, the text, or child elements by key.

        ``@_name`` returns an attribute value, ``#text`` the element text,
        and any other key the matching children: None when there are none,
        the node itself when there is exactly one, a list otherwise. Wrap
        the result in ``as_list`` to treat both cases alike.
        """
        if key.startswith(ATTR_PREFIX):
            return self.attributes.get(key[len(ATTR_PREFIX) :])
        if key == TEXT_KEY:
            return self.text
        matches = self.children_named(key)
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        return matches

    def children_named(self, name: str) -> list[XmlNode]:
        return [child for child in self.children if child.name == name]

    def first(self, name: str) -> XmlNode | None:
        """First child element with the given name."""
        return next((child for child in self.children if child.name == name), None)

    def attr(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def text_content(self) -> str:
        """All character data in this subtree with whitespace collapsed."""
        return " ".join("".join(self._iter_text()).split())

    def _iter_text(self) -> Iterator[str]:
        yield self._head
        for child in self.children:
            yield from child._iter_text()
            yield child._tail

    def find_path(self, *names: str) -> XmlNode | None:
        """Follow first-child steps, e.g. ``find_path("rootfiles", "rootfile")``."""
        node: XmlNode | None = self
        for name in names:
            if node is None:
                return None
            node = node.first(name)
        return node


def as_list(value: Lookup) -> list:
    """Coerce a lookup result to a list: None -> [], scalar -> [scalar]."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _local_name(tag: str) -> str:
    return etree.QName(tag).localname


def _build(element: etree._Element, tail: str = "") -> XmlNode:
    head = element.text or ""
    # (child element, text that follows it) in document order
    pairs: list[tuple[etree._Element, str]] = []
    for child in element:
        child_tail = child.tail or ""
        # Comments, processing instructions, and entity references have non-str tags
        if isinstance(child.tag, str):
            pairs.append((child, child_tail))
        elif pairs:
            pairs[-1] = (pairs[-1][0], pairs[-1][1] + child_tail)
        else:
            head += child_tail

    attributes = {_local_name(key): value for key, value in element.attrib.items()}
    own_text = head + "".join(child_tail for _, child_tail in pairs)
    return XmlNode(
        name=_local_name(element.tag),
        attributes=MappingProxyType(attributes),
        children=tuple(_build(child, child_tail) for child, child_tail in pairs),
        text=own_text.strip(),
        _head=head,
        _tail=tail,
    )


def parse_xml(source: str | bytes, *, name: str | None = None) -> XmlNode:
    """Parse an XML document into an XmlNode tree.

    Bytes are decoded according to the document's own declaration; str input
    is treated as already-decoded text.

    Args:
        source: The document.
        name: Optional label (usually an archive path) used in error messages.

    Raises:
        XmlMalformedError: If the document cannot be parsed.
    """
    if isinstance(source, str):
        data = source.encode("utf-8")
        encoding: str | None = "utf-8"
    else:
        data = source
        encoding = None

    parser = etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise XmlMalformedError(str(exc), source=name) from exc
    if root is None:
        raise XmlMalformedError("document is empty", source=name)

    logger.debug("Parsed XML %s with root <%s>", name or "<document>", _local_name(root.tag))
    return _build(root)
