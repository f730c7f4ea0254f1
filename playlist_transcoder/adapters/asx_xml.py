"""XML binding for ASX playlists.

WHY: ASX files in the wild mix upper- and lower-case element and
attribute names (<ENTRY>, <Ref HREF=...>), contain bare ampersands in
URLs, and spell yes/no flags inconsistently. This adapter absorbs that
mess so the dialect model stays clean.

HOW: Names are case-folded before lxml parsing. Elements are then
mapped onto the dataclasses in models/asx.py; writing does the reverse
with lower-case names.

RULES:
- <duration> and <starttime> need a value attribute
- <param> needs a name attribute; duplicate names: last one wins
- <entryref> and <ref> without href are kept (href=None); the importer skips them
- Unknown elements are ignored on read
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import lxml.etree

from playlist_transcoder.adapters.xml_binding import (
    add_child,
    add_text_child,
    attribute,
    child_text,
    find_child,
    find_children,
    iter_children,
    local_name,
    parse_document,
    required_attribute,
    serialize_document,
    set_attribute,
)
from playlist_transcoder.errors import MalformedDocumentError
from playlist_transcoder.models.asx import (
    Asx,
    Entry,
    Entryref,
    Metadata,
    Reference,
    Repeat,
    parse_duration,
)

logger = logging.getLogger(__name__)


def _read_clock(element: lxml.etree._Element, name: str):
    child = find_child(element, name)
    if child is None:
        return None
    return parse_duration(required_attribute(child, "value"))


def _read_metadata(element: lxml.etree._Element) -> Metadata:
    metadata = Metadata(
        title=child_text(element, "title"),
        author=child_text(element, "author"),
        copyright=child_text(element, "copyright"),
        abstract=child_text(element, "abstract"),
    )
    base = find_child(element, "base")
    if base is not None:
        metadata.base = attribute(base, "href")
    more_info = find_child(element, "moreinfo")
    if more_info is not None:
        metadata.more_info = attribute(more_info, "href")
    for param in find_children(element, "param"):
        metadata.add_param(required_attribute(param, "name"), param.get("value", ""))
    return metadata


def _read_entry(element: lxml.etree._Element) -> Entry:
    entry = Entry(
        duration=_read_clock(element, "duration"),
        start_time=_read_clock(element, "starttime"),
        client_skip=(attribute(element, "clientskip") or "").upper() != "NO",
        skip_if_ref=(attribute(element, "skipifref") or "").upper() == "YES",
        metadata=_read_metadata(element),
    )
    for ref in find_children(element, "ref"):
        entry.add_reference(Reference(
            href=attribute(ref, "href"),
            duration=_read_clock(ref, "duration"),
            start_time=_read_clock(ref, "starttime"),
        ))
    return entry


def _read_repeat(element: lxml.etree._Element) -> Repeat:
    count = attribute(element, "count")
    try:
        repeat = Repeat(count=int(count) if count is not None else None)
    except ValueError as e:
        raise MalformedDocumentError("Invalid <repeat> count {!r}".format(count)) from e
    for child in iter_children(element):
        name = local_name(child)
        if name == "entry":
            repeat.add_element(_read_entry(child))
        elif name == "entryref":
            repeat.add_element(Entryref(href=attribute(child, "href")))
    return repeat


def read_asx(data: Union[bytes, str], encoding: Optional[str] = None) -> Asx:
    """Parse ASX text into an Asx model."""
    root = parse_document(data, "asx", encoding=encoding, fold_case=True)
    asx = Asx(
        version=attribute(root, "version") or "3.0",
        preview_mode=(attribute(root, "previewmode") or "").upper() == "YES",
        banner_bar="FIXED" if (attribute(root, "bannerbar") or "").upper() == "FIXED" else None,
        metadata=_read_metadata(root),
    )
    for child in iter_children(root):
        name = local_name(child)
        if name == "entry":
            asx.add_element(_read_entry(child))
        elif name == "entryref":
            asx.add_element(Entryref(href=attribute(child, "href")))
        elif name == "repeat":
            asx.add_element(_read_repeat(child))
    logger.debug("Read ASX playlist with %d top-level elements", len(asx.elements))
    return asx


def _write_clock(parent: lxml.etree._Element, name: str, value) -> None:
    if value is not None:
        set_attribute(add_child(parent, name), "value", value)


def _write_metadata(parent: lxml.etree._Element, metadata: Metadata) -> None:
    add_text_child(parent, "title", metadata.title)
    add_text_child(parent, "author", metadata.author)
    add_text_child(parent, "copyright", metadata.copyright)
    add_text_child(parent, "abstract", metadata.abstract)
    if metadata.base is not None:
        set_attribute(add_child(parent, "base"), "href", metadata.base)
    if metadata.more_info is not None:
        set_attribute(add_child(parent, "moreinfo"), "href", metadata.more_info)
    for name, value in metadata.params.items():
        param = add_child(parent, "param")
        param.set("name", name)
        param.set("value", value)


def _write_entry(parent: lxml.etree._Element, entry: Entry) -> None:
    element = add_child(parent, "entry")
    if not entry.client_skip:
        element.set("clientskip", "NO")
    if entry.skip_if_ref:
        element.set("skipifref", "YES")
    _write_metadata(element, entry.metadata)
    _write_clock(element, "duration", entry.duration)
    _write_clock(element, "starttime", entry.start_time)
    for reference in entry.references:
        ref = add_child(element, "ref")
        set_attribute(ref, "href", reference.href)
        _write_clock(ref, "duration", reference.duration)
        _write_clock(ref, "starttime", reference.start_time)


def _write_element(parent: lxml.etree._Element, element: Union[Entry, Entryref, Repeat]) -> None:
    if isinstance(element, Entry):
        _write_entry(parent, element)
    elif isinstance(element, Entryref):
        set_attribute(add_child(parent, "entryref"), "href", element.href)
    else:
        repeat = add_child(parent, "repeat")
        set_attribute(repeat, "count", element.count)
        for child in element.elements:
            _write_element(repeat, child)


def write_asx(asx: Asx, encoding: Optional[str] = None, indent: Optional[bool] = None) -> bytes:
    """Serialize an Asx model to XML bytes."""
    root = lxml.etree.Element("asx")
    root.set("version", asx.version)
    if asx.preview_mode:
        root.set("previewmode", "YES")
    set_attribute(root, "bannerbar", asx.banner_bar)
    _write_metadata(root, asx.metadata)
    for element in asx.elements:
        _write_element(root, element)
    return serialize_document(root, encoding=encoding, indent=indent)
