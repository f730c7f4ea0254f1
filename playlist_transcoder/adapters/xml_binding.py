"""Shared lxml helpers for turning playlist XML into models and back.

WHY: Every dialect adapter needs the same plumbing. It decodes bytes,
repairs the bare ampersands real-world playlists contain, parses with
clear errors, reads optional and mandatory attributes, and serializes
with a declared encoding. Doing it once keeps the per-dialect adapters
down to element mapping.

HOW: Thin functions over lxml.etree. Parsing strips any XML
declaration from the decoded text (the text is already Unicode) and
uses a parser that drops comments and blank text. Serialization writes
an XML declaration in the caller's encoding, with optional
pretty-printing.

RULES:
- A bare "&" not starting an entity reference becomes "&amp;" before parsing
- Undecodable bytes, malformed XML or an unexpected root → MalformedDocumentError
- A missing mandatory attribute/element → MissingRequiredFieldError
- Tags are compared by local name, so namespaced SMIL documents parse too
- Encoding defaults to config.DEFAULT_ENCODING; indent to config.XML_INDENT
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Union

import lxml.etree

from playlist_transcoder import config
from playlist_transcoder.errors import MalformedDocumentError, MissingRequiredFieldError

logger = logging.getLogger(__name__)

_BARE_AMPERSAND_RE = re.compile(r"&(?![a-zA-Z0-9#]+;)")
_XML_DECLARATION_RE = re.compile(r"^\s*<\?xml\b[^>]*\?>")
_MARKUP_RE = re.compile(
    r"<!--.*?-->|<!\[CDATA\[.*?\]\]>|<[!?][^>]*>|<(?:\"[^\"]*\"|'[^']*'|[^>\"'])*>",
    re.DOTALL,
)
_QUOTED_OR_BARE_RE = re.compile(r"\"[^\"]*\"|'[^']*'|[^\"']+")


def decode(data: Union[bytes, str], encoding: Optional[str] = None) -> str:
    """Return the document as text, decoding bytes with encoding (or the default)."""
    if isinstance(data, str):
        return data
    enc = encoding or config.DEFAULT_ENCODING
    try:
        text = data.decode(enc)
    except UnicodeDecodeError as e:
        raise MalformedDocumentError("Document is not valid {}: {}".format(enc, e)) from e
    return text.lstrip("\ufeff")


def repair_ampersands(text: str) -> str:
    """Escape "&" characters that do not start an entity or character reference."""
    return _BARE_AMPERSAND_RE.sub("&amp;", text)


def _fold_tag(match: "re.Match[str]") -> str:
    if match.group(0)[1] in "!?":
        return match.group(0)
    pieces = []
    for piece in _QUOTED_OR_BARE_RE.findall(match.group(0)):
        if piece[0] in "\"'":
            pieces.append(piece)
        else:
            pieces.append(piece.lower())
    return "".join(pieces)


def fold_tag_case(text: str) -> str:
    """Lower-case element and attribute names, leaving attribute values alone.

    Comments, processing instructions, CDATA sections and character data
    between tags are untouched, including any tag-like text inside them.
    A ">" inside a quoted attribute value does not end the tag.
    """
    return _MARKUP_RE.sub(_fold_tag, text)


def local_name(element: lxml.etree._Element) -> str:
    return lxml.etree.QName(element).localname


def iter_children(element: lxml.etree._Element) -> Iterator[lxml.etree._Element]:
    """Child elements only (skips processing instructions and entities)."""
    for child in element:
        if isinstance(child.tag, str):
            yield child


def find_child(element: lxml.etree._Element, name: str) -> Optional[lxml.etree._Element]:
    for child in iter_children(element):
        if local_name(child) == name:
            return child
    return None


def find_children(element: lxml.etree._Element, name: str) -> List[lxml.etree._Element]:
    return [child for child in iter_children(element) if local_name(child) == name]


def child_text(element: lxml.etree._Element, name: str) -> Optional[str]:
    """Stripped text of the first child called name; None if absent or blank."""
    child = find_child(element, name)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None


def attribute(element: lxml.etree._Element, name: str) -> Optional[str]:
    """Stripped attribute value; None if absent or blank."""
    value = element.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def required_attribute(element: lxml.etree._Element, name: str) -> str:
    value = attribute(element, name)
    if value is None:
        raise MissingRequiredFieldError(local_name(element), name)
    return value


def required_child(element: lxml.etree._Element, name: str) -> lxml.etree._Element:
    child = find_child(element, name)
    if child is None:
        raise MissingRequiredFieldError(local_name(element), name)
    return child


def parse_document(
    data: Union[bytes, str],
    root_name: str,
    encoding: Optional[str] = None,
    fold_case: bool = False,
) -> lxml.etree._Element:
    """Parse playlist XML and check the root element.

    Args:
        data: Raw bytes or already-decoded text.
        root_name: Expected local name of the root element.
        encoding: Character encoding of data when it is bytes.
        fold_case: Lower-case element/attribute names first (ASX).

    Returns:
        The root element.

    Raises:
        MalformedDocumentError: If the text is not well-formed XML or the
            root element is not root_name.
    """
    text = repair_ampersands(decode(data, encoding))
    text = _XML_DECLARATION_RE.sub("", text, count=1)
    if fold_case:
        text = fold_tag_case(text)

    parser = lxml.etree.XMLParser(
        remove_blank_text=True,
        remove_comments=True,
        resolve_entities=False,
        no_network=True,
    )
    try:
        root = lxml.etree.fromstring(text, parser)
    except lxml.etree.XMLSyntaxError as e:
        raise MalformedDocumentError("Malformed XML: {}".format(e)) from e

    name = local_name(root)
    if name != root_name:
        raise MalformedDocumentError(
            "Expected root element <{}>, found <{}>".format(root_name, name)
        )
    logger.debug("Parsed <%s> document", root_name)
    return root


def set_attribute(element: lxml.etree._Element, name: str, value: Optional[object]) -> None:
    """Set an attribute, skipping None values."""
    if value is not None:
        element.set(name, str(value))


def add_child(
    parent: lxml.etree._Element,
    name: str,
    text: Optional[object] = None,
) -> lxml.etree._Element:
    child = lxml.etree.SubElement(parent, name)
    if text is not None:
        child.text = str(text)
    return child


def add_text_child(parent: lxml.etree._Element, name: str, text: Optional[object]) -> None:
    """Add <name>text</name> only when text is not None."""
    if text is not None:
        add_child(parent, name, text)


def serialize_document(
    root: lxml.etree._Element,
    encoding: Optional[str] = None,
    indent: Optional[bool] = None,
) -> bytes:
    """Serialize a document root (and any processing instructions before it)."""
    enc = encoding or config.DEFAULT_ENCODING
    pretty = config.XML_INDENT if indent is None else indent
    tree = lxml.etree.ElementTree(root)
    data = lxml.etree.tostring(
        tree,
        encoding=enc,
        xml_declaration=True,
        pretty_print=pretty,
    )
    logger.debug("Serialized <%s> document (%d bytes, %s)", local_name(root), len(data), enc)
    return data
