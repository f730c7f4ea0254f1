"""WPL dialect: Windows Media Player playlists, a flat list of media."""

from __future__ import annotations

from typing import Tuple

from playlist_transcoder import config
from playlist_transcoder.adapters.wpl_xml import read_wpl, write_wpl
from playlist_transcoder.core.capabilities import FLAT_LIST
from playlist_transcoder.core.ir import Media, Sequence
from playlist_transcoder.dialects.base import BaseDialect, FlatListSink
from playlist_transcoder.models.wpl import (
    GENERATOR,
    ITEM_COUNT,
    Body,
    Head,
    Media as WplMedia,
    WplDocument,
)

DIALECT_ID = "wpl"


class _WplSink(FlatListSink):
    def __init__(self, document: WplDocument) -> None:
        super().__init__(DIALECT_ID)
        self.document = document

    def add_media(self, media: Media, repeat_count: int) -> None:
        self.document.body.seq.medias.append(WplMedia(src=media.locator))


class WplDialect(BaseDialect):
    id = DIALECT_ID
    capabilities = FLAT_LIST

    @property
    def name(self) -> str:
        return "Windows Media Player (WPL)"

    def parse(self, data, encoding=None) -> WplDocument:
        return read_wpl(data, encoding=encoding)

    def serialize(self, model: WplDocument, encoding=None, indent=None) -> bytes:
        return write_wpl(model, encoding=encoding, indent=indent)

    def to_playlist(self, model: WplDocument) -> Sequence:
        if model.body is None:
            return Sequence()
        return Sequence(children=[Media(locator=media.src) for media in model.body.seq.medias if media.src])

    def new_export(self) -> Tuple[WplDocument, FlatListSink]:
        document = WplDocument(head=Head(), body=Body())
        return document, _WplSink(document)

    def finish_export(self, model: WplDocument) -> None:
        model.head.add_meta(GENERATOR, config.GENERATOR)
        model.head.add_meta(ITEM_COUNT, str(len(model.body.seq.medias)))
