"""XML binding for Windows Media Player (WPL) playlists.

WPL documents look like SMIL (<smil><head/><body><seq/></body></smil>)
preceded by a <?wpl version="1.0"?> processing instruction. Only the
first <seq> of the body is read; every <media> in it needs a src.
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
    parse_document,
    required_attribute,
    serialize_document,
    set_attribute,
)
from playlist_transcoder.models.wpl import Body, Head, Media, Meta, Seq, WplDocument

logger = logging.getLogger(__name__)

WPL_PI_TARGET = "wpl"
WPL_PI_TEXT = 'version="1.0"'


def _read_head(element: lxml.etree._Element) -> Head:
    head = Head(
        title=child_text(element, "title"),
        author=child_text(element, "author"),
    )
    for meta in find_children(element, "meta"):
        head.metas.append(Meta(name=attribute(meta, "name"), content=attribute(meta, "content")))
    return head


def read_wpl(data: Union[bytes, str], encoding: Optional[str] = None) -> WplDocument:
    """Parse WPL text into a WplDocument model."""
    root = parse_document(data, "smil", encoding=encoding)
    document = WplDocument()
    head = find_child(root, "head")
    if head is not None:
        document.head = _read_head(head)
    body = find_child(root, "body")
    if body is not None:
        document.body = Body()
        seq = find_child(body, "seq")
        if seq is not None:
            for media in find_children(seq, "media"):
                document.body.seq.medias.append(Media(
                    src=required_attribute(media, "src"),
                    cid=attribute(media, "cid"),
                    tid=attribute(media, "tid"),
                ))
    logger.debug(
        "Read WPL playlist with %d media",
        len(document.body.seq.medias) if document.body is not None else 0,
    )
    return document


def write_wpl(document: WplDocument, encoding: Optional[str] = None, indent: Optional[bool] = None) -> bytes:
    """Serialize a WplDocument, including the <?wpl?> processing instruction."""
    root = lxml.etree.Element("smil")
    root.addprevious(lxml.etree.PI(WPL_PI_TARGET, WPL_PI_TEXT))
    if document.head is not None:
        head = add_child(root, "head")
        for meta in document.head.metas:
            meta_element = add_child(head, "meta")
            set_attribute(meta_element, "name", meta.name)
            set_attribute(meta_element, "content", meta.content)
        add_text_child(head, "author", document.head.author)
        add_text_child(head, "title", document.head.title)
    if document.body is not None:
        seq = add_child(add_child(root, "body"), "seq")
        for media in document.body.seq.medias:
            media_element = add_child(seq, "media")
            media_element.set("src", media.src)
            set_attribute(media_element, "cid", media.cid)
            set_attribute(media_element, "tid", media.tid)
    return serialize_document(root, encoding=encoding, indent=indent)
