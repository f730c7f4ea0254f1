"""Hypetape dialect: a flat list of MP3 tracks."""

from __future__ import annotations

from typing import Tuple

from playlist_transcoder.adapters.hypetape_xml import read_hypetape, write_hypetape
from playlist_transcoder.core.capabilities import FLAT_LIST
from playlist_transcoder.core.ir import Media, Sequence
from playlist_transcoder.dialects.base import BaseDialect, FlatListSink, IdSequence
from playlist_transcoder.models.hypetape import HypetapePlaylist, Track

DIALECT_ID = "hypetape"


class _HypetapeSink(FlatListSink):
    def __init__(self, playlist: HypetapePlaylist) -> None:
        super().__init__(DIALECT_ID)
        self.playlist = playlist
        self.ids = IdSequence()

    def add_media(self, media: Media, repeat_count: int) -> None:
        self.playlist.tracks.append(Track(id=self.ids.next(), name=media.locator, mp3=media.locator))


class HypetapeDialect(BaseDialect):
    id = DIALECT_ID
    capabilities = FLAT_LIST

    @property
    def name(self) -> str:
        return "Hypetape"

    def parse(self, data, encoding=None) -> HypetapePlaylist:
        return read_hypetape(data, encoding=encoding)

    def serialize(self, model: HypetapePlaylist, encoding=None, indent=None) -> bytes:
        return write_hypetape(model, encoding=encoding, indent=indent)

    def to_playlist(self, model: HypetapePlaylist) -> Sequence:
        # Tracks without an mp3 attribute have nothing to play.
        return Sequence(children=[Media(locator=track.mp3) for track in model.tracks if track.mp3])

    def new_export(self) -> Tuple[HypetapePlaylist, FlatListSink]:
        playlist = HypetapePlaylist()
        return playlist, _HypetapeSink(playlist)
