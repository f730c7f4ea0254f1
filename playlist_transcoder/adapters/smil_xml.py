"""XML binding for SMIL playlists.

WHY: SMIL documents come in several profiles and namespaces and use
many elements this converter does not model (switch, animate,
transitions...). Reading must keep what matters for playback order
and skip the rest, without failing.

HOW: Elements are matched by local name, so SMIL 1.0, 2.0 and 3.0
namespaces all work. seq/par recurse, media object elements become
Reference objects, and anything else is skipped. Writing emits
un-namespaced SMIL.

RULES:
- dur is parsed with the Extended clock grammar ("media" → None)
- repeatCount "indefinite" → -1; non-numeric counts are malformed
- Unknown elements are ignored (with a debug log line)
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import lxml.etree

from playlist_transcoder.adapters.xml_binding import (
    add_child,
    attribute,
    find_child,
    find_children,
    iter_children,
    local_name,
    parse_document,
    serialize_document,
    set_attribute,
)
from playlist_transcoder.errors import MalformedDocumentError
from playlist_transcoder.models.smil import (
    MEDIA_TAGS,
    Body,
    Head,
    Layout,
    Meta,
    ParallelTiming,
    Reference,
    Region,
    SequentialTiming,
    Smil,
    SmilElement,
    TimingAttributes,
    format_repeat_count,
    parse_duration,
    parse_repeat_count,
)

logger = logging.getLogger(__name__)


def _read_timing(element: lxml.etree._Element) -> TimingAttributes:
    repeat_text = attribute(element, "repeatCount")
    try:
        repeat_count = parse_repeat_count(repeat_text)
    except ValueError as e:
        raise MalformedDocumentError("Invalid repeatCount {!r}".format(repeat_text)) from e
    return TimingAttributes(
        id=attribute(element, "id"),
        title=attribute(element, "title"),
        region=attribute(element, "region"),
        begin=attribute(element, "begin"),
        end=attribute(element, "end"),
        dur=parse_duration(attribute(element, "dur")),
        repeat_count=repeat_count,
        repeat_dur=attribute(element, "repeatDur"),
    )


def _read_children(element: lxml.etree._Element, container: SequentialTiming | ParallelTiming) -> None:
    for child in iter_children(element):
        smil_element = _read_element(child)
        if smil_element is not None:
            container.children.append(smil_element)


def _read_element(element: lxml.etree._Element) -> Optional[SmilElement]:
    name = local_name(element)
    if name == "seq":
        seq = SequentialTiming(timing=_read_timing(element))
        _read_children(element, seq)
        return seq
    if name == "par":
        par = ParallelTiming(timing=_read_timing(element))
        _read_children(element, par)
        return par
    if name in MEDIA_TAGS:
        return Reference(
            tag=name,
            src=attribute(element, "src"),
            type=attribute(element, "type"),
            fill=attribute(element, "fill"),
            timing=_read_timing(element),
        )
    logger.debug("Ignoring unsupported SMIL element <%s>", name)
    return None


def _read_head(element: lxml.etree._Element) -> Head:
    head = Head()
    for meta in find_children(element, "meta"):
        head.metas.append(Meta(name=attribute(meta, "name"), content=attribute(meta, "content")))
    layout = find_child(element, "layout")
    if layout is not None:
        head.layout = Layout(type=attribute(layout, "type"))
        for region in find_children(layout, "region"):
            head.layout.regions.append(Region(
                id=attribute(region, "id"),
                region_name=attribute(region, "regionName"),
                width=attribute(region, "width"),
                height=attribute(region, "height"),
                background_color=attribute(region, "backgroundColor"),
            ))
    return head


def read_smil(data: Union[bytes, str], encoding: Optional[str] = None) -> Smil:
    """Parse SMIL text into a Smil model."""
    root = parse_document(data, "smil", encoding=encoding)
    smil = Smil()
    head = find_child(root, "head")
    if head is not None:
        smil.head = _read_head(head)
    body = find_child(root, "body")
    if body is not None:
        smil.body = Body(timing=_read_timing(body))
        _read_children(body, smil.body)
    return smil


def _write_timing(element: lxml.etree._Element, timing: TimingAttributes) -> None:
    set_attribute(element, "id", timing.id)
    set_attribute(element, "title", timing.title)
    set_attribute(element, "region", timing.region)
    set_attribute(element, "begin", timing.begin)
    set_attribute(element, "end", timing.end)
    set_attribute(element, "dur", timing.dur)
    set_attribute(element, "repeatCount", format_repeat_count(timing.repeat_count))
    set_attribute(element, "repeatDur", timing.repeat_dur)


def _write_element(parent: lxml.etree._Element, element: SmilElement) -> None:
    if isinstance(element, Reference):
        ref = add_child(parent, element.tag)
        set_attribute(ref, "src", element.src)
        set_attribute(ref, "type", element.type)
        set_attribute(ref, "fill", element.fill)
        _write_timing(ref, element.timing)
        return
    tag = "par" if isinstance(element, ParallelTiming) else "seq"
    container = add_child(parent, tag)
    _write_timing(container, element.timing)
    for child in element.children:
        _write_element(container, child)


def _write_head(parent: lxml.etree._Element, head: Head) -> None:
    element = add_child(parent, "head")
    for meta in head.metas:
        meta_element = add_child(element, "meta")
        set_attribute(meta_element, "name", meta.name)
        set_attribute(meta_element, "content", meta.content)
    if head.layout is not None:
        layout = add_child(element, "layout")
        set_attribute(layout, "type", head.layout.type)
        for region in head.layout.regions:
            region_element = add_child(layout, "region")
            set_attribute(region_element, "id", region.id)
            set_attribute(region_element, "regionName", region.region_name)
            set_attribute(region_element, "width", region.width)
            set_attribute(region_element, "height", region.height)
            set_attribute(region_element, "backgroundColor", region.background_color)


def write_smil(smil: Smil, encoding: Optional[str] = None, indent: Optional[bool] = None) -> bytes:
    """Serialize a Smil model to XML bytes."""
    root = lxml.etree.Element("smil")
    if smil.head is not None:
        _write_head(root, smil.head)
    if smil.body is not None:
        body = add_child(root, "body")
        _write_timing(body, smil.body.timing)
        for child in smil.body.children:
            _write_element(body, child)
    return serialize_document(root, encoding=encoding, indent=indent)
