"""ASX dialect: Advanced Stream Redirector playlists (.asx, .wax, .wvx).

WHY: ASX can repeat a block of entries (finitely or forever) and time
each reference, but it has no parallel playback and a <repeat> element
may only contain entries, not another <repeat>.

HOW: The importer walks the top-level elements. An <entry> becomes one
Media from its first usable <ref>; an <entryref> becomes a Media with
the playlist URL; a <repeat> becomes a Sequence with
repeat_count = count + 1 (or -1 without a count). The exporter lowers
through _AsxSink: the root sink appends to <asx>; a repeated Sequence
opens a <repeat> whose sink refuses further native repeats, so the
engine unrolls anything nested inside it.

RULES:
- A <ref> is usable if it has an href and its duration (else the
  entry's) is absent or strictly positive
- Locators ending in a playlist extension are written as <entryref>,
  which cannot carry a duration
- An indefinite media duration cannot be written in the Simple grammar
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from playlist_transcoder.adapters.asx_xml import read_asx, write_asx
from playlist_transcoder.config import ASX_PLAYLIST_EXTENSIONS
from playlist_transcoder.core.capabilities import Capabilities
from playlist_transcoder.core.clock import INDEFINITE_DURATION
from playlist_transcoder.core.ir import INDEFINITE_REPEAT, Media, PlaylistNode, Sequence
from playlist_transcoder.core.lowering import PARALLEL, LoweringSink
from playlist_transcoder.dialects.base import BaseDialect
from playlist_transcoder.errors import UnsupportedConstructError
from playlist_transcoder.models.asx import (
    Asx,
    Entry,
    Entryref,
    Reference,
    Repeat,
    duration_from_millis,
)

logger = logging.getLogger(__name__)

DIALECT_ID = "asx"
TIMED_PLAYLIST_REFERENCE = "timed playlist reference"
INDEFINITE_DURATION_CONSTRUCT = "indefinite duration"


def is_playlist_reference(locator: str) -> bool:
    """True if locator names another ASX playlist rather than media."""
    return locator.lower().endswith(ASX_PLAYLIST_EXTENSIONS)


def _positive_millis(value) -> Optional[int]:
    if value is None or value.millis <= 0:
        return None
    return value.millis


def _select_reference(entry: Entry) -> Optional[Reference]:
    for reference in entry.references:
        if not reference.href:
            continue
        duration = reference.duration if reference.duration is not None else entry.duration
        if duration is None or duration.millis > 0:
            return reference
    return None


def _import_entry(entry: Entry) -> Optional[Media]:
    reference = _select_reference(entry)
    if reference is None:
        logger.debug("Skipping <entry> without a usable <ref>")
        return None
    duration = reference.duration if reference.duration is not None else entry.duration
    return Media(locator=reference.href, duration_ms=_positive_millis(duration))


def _import_elements(elements: List[Union[Entry, Entryref, Repeat]]) -> List[PlaylistNode]:
    nodes: List[PlaylistNode] = []
    for element in elements:
        if isinstance(element, Entry):
            media = _import_entry(element)
            if media is not None:
                nodes.append(media)
        elif isinstance(element, Entryref):
            if element.href:
                nodes.append(Media(locator=element.href))
        else:
            repeat_count = INDEFINITE_REPEAT if element.count is None else element.count + 1
            nodes.append(Sequence(children=_import_elements(element.elements), repeat_count=repeat_count))
    return nodes


class _AsxSink(LoweringSink):
    """Appends lowered items to an <asx> root or to one <repeat> element."""

    def __init__(self, container: Union[Asx, Repeat]) -> None:
        self.container = container
        self.accepts_repeat = isinstance(container, Asx)

    def add_sequence(self, repeat_count: int) -> LoweringSink:
        if repeat_count == 1:
            return self
        repeat = Repeat(count=None if repeat_count == INDEFINITE_REPEAT else repeat_count - 1)
        self.container.add_element(repeat)
        return _AsxSink(repeat)

    def add_parallel(self, repeat_count: int) -> LoweringSink:
        raise UnsupportedConstructError(PARALLEL, DIALECT_ID)

    def add_media(self, media: Media, repeat_count: int) -> None:
        target = self.add_sequence(repeat_count)
        if is_playlist_reference(media.locator):
            if media.duration_ms is not None:
                raise UnsupportedConstructError(TIMED_PLAYLIST_REFERENCE, DIALECT_ID)
            target.container.add_element(Entryref(href=media.locator))
            return
        if media.duration_ms == INDEFINITE_DURATION:
            raise UnsupportedConstructError(INDEFINITE_DURATION_CONSTRUCT, DIALECT_ID)
        reference = Reference(href=media.locator)
        if media.duration_ms is not None:
            reference.duration = duration_from_millis(media.duration_ms)
        entry = Entry()
        entry.add_reference(reference)
        target.container.add_element(entry)


class AsxDialect(BaseDialect):
    id = DIALECT_ID
    capabilities = Capabilities(
        supports_parallel=False,
        supports_infinite_repeat=True,
        supports_nested_repeat=True,
        supports_media_duration=True,
    )

    @property
    def name(self) -> str:
        return "Advanced Stream Redirector (ASX)"

    def parse(self, data, encoding=None) -> Asx:
        return read_asx(data, encoding=encoding)

    def serialize(self, model: Asx, encoding=None, indent=None) -> bytes:
        return write_asx(model, encoding=encoding, indent=indent)

    def to_playlist(self, model: Asx) -> Sequence:
        return Sequence(children=_import_elements(model.elements))

    def new_export(self) -> Tuple[Asx, LoweringSink]:
        asx = Asx()
        return asx, _AsxSink(asx)
