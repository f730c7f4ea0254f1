"""SMIL dialect: the one dialect that can express every IR construct.

WHY: SMIL's seq/par containers and repeatCount map one-to-one onto
Sequence/Parallel and repeat_count, so conversions into SMIL never
fail for structural reasons.

HOW: The importer maps <body> to the root Sequence (carrying the body's
repeatCount), <seq> to Sequence, <par> to Parallel and every media
object element to Media. The exporter lowers into _SmilSink, which
appends seq/par/ref elements; the root Sequence is written as <body>
itself rather than as a <seq> inside it.

RULES:
- A media element without src is skipped on import
- dur is kept only when strictly positive ("media" means no duration)
- The media "type" attribute travels as Media.content_type
- Against a table without nested repeat, the root repeat is unrolled
  instead of written on <body>
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from playlist_transcoder.adapters.smil_xml import read_smil, write_smil
from playlist_transcoder.core.capabilities import Capabilities
from playlist_transcoder.core.ir import INDEFINITE_REPEAT, Media, Parallel, PlaylistNode, Sequence
from playlist_transcoder.core.lowering import INFINITE_REPEAT, LoweringSink, lower
from playlist_transcoder.dialects.base import BaseDialect
from playlist_transcoder.errors import UnsupportedConstructError
from playlist_transcoder.models.smil import (
    Body,
    ParallelTiming,
    Reference,
    SequentialTiming,
    Smil,
    SmilElement,
    TimingAttributes,
)

DIALECT_ID = "smil"


def _import_element(element: SmilElement) -> Optional[PlaylistNode]:
    timing = element.timing
    if isinstance(element, Reference):
        if not element.src:
            return None
        duration_ms = None
        if timing.dur is not None and timing.dur.millis > 0:
            duration_ms = timing.dur.millis
        return Media(
            locator=element.src,
            duration_ms=duration_ms,
            repeat_count=timing.repeat_count,
            content_type=element.type,
        )
    children = _import_children(element.children)
    if isinstance(element, ParallelTiming):
        return Parallel(children=children, repeat_count=timing.repeat_count)
    return Sequence(children=children, repeat_count=timing.repeat_count)


def _import_children(elements: List[SmilElement]) -> List[PlaylistNode]:
    nodes = []
    for element in elements:
        node = _import_element(element)
        if node is not None:
            nodes.append(node)
    return nodes


class _SmilSink(LoweringSink):
    """Appends lowered items to one SMIL time container."""

    def __init__(self, container: Union[SequentialTiming, ParallelTiming]) -> None:
        self.container = container

    def add_sequence(self, repeat_count: int) -> LoweringSink:
        seq = SequentialTiming(timing=TimingAttributes(repeat_count=repeat_count))
        self.container.children.append(seq)
        return _SmilSink(seq)

    def add_parallel(self, repeat_count: int) -> LoweringSink:
        par = ParallelTiming(timing=TimingAttributes(repeat_count=repeat_count))
        self.container.children.append(par)
        return _SmilSink(par)

    def add_media(self, media: Media, repeat_count: int) -> None:
        timing = TimingAttributes(repeat_count=repeat_count)
        timing.set_dur_millis(media.duration_ms)
        self.container.children.append(
            Reference(src=media.locator, type=media.content_type, timing=timing)
        )


class SmilDialect(BaseDialect):
    id = DIALECT_ID
    capabilities = Capabilities(
        supports_parallel=True,
        supports_infinite_repeat=True,
        supports_nested_repeat=True,
        supports_media_duration=True,
    )

    @property
    def name(self) -> str:
        return "Synchronized Multimedia Integration Language (SMIL)"

    def parse(self, data, encoding=None) -> Smil:
        return read_smil(data, encoding=encoding)

    def serialize(self, model: Smil, encoding=None, indent=None) -> bytes:
        return write_smil(model, encoding=encoding, indent=indent)

    def to_playlist(self, model: Smil) -> Sequence:
        if model.body is None:
            return Sequence()
        return Sequence(
            children=_import_children(model.body.children),
            repeat_count=model.body.timing.repeat_count,
        )

    def new_export(self) -> Tuple[Smil, LoweringSink]:
        smil = Smil(body=Body())
        return smil, _SmilSink(smil.body)

    def lower_root(self, root: PlaylistNode, capabilities: Capabilities, sink: LoweringSink) -> None:
        if not isinstance(root, Sequence):
            lower(root, capabilities, sink, self.id)
            return
        passes = 1
        if capabilities.supports_nested_repeat and sink.accepts_repeat:
            sink.container.timing.repeat_count = root.repeat_count
        elif root.repeat_count == INDEFINITE_REPEAT:
            raise UnsupportedConstructError(INFINITE_REPEAT, self.id)
        else:
            # <body> cannot carry the repeat, so its children are unrolled.
            passes = root.repeat_count
        for _ in range(passes):
            for child in root.children:
                lower(child, capabilities, sink, self.id)
