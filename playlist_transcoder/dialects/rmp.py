"""RMP dialect: RealJukebox / RealPlayer packages.

The importer expands the server LOCATION template for every track; a
track's DURATION is content metadata and never becomes a Media
duration. The exporter writes one TRACK per (unrolled) media item with
the locator as both title and file name, and the default "%f" location
template, so importing the result yields the same locators.
"""

from __future__ import annotations

import logging
from typing import Tuple

from playlist_transcoder import config
from playlist_transcoder.adapters.rmp_xml import read_rmp, write_rmp
from playlist_transcoder.core.capabilities import FLAT_LIST
from playlist_transcoder.core.ir import Media, Sequence
from playlist_transcoder.dialects.base import BaseDialect, FlatListSink, IdSequence
from playlist_transcoder.models.rmp import Package, Provider, Track, Tracklist

logger = logging.getLogger(__name__)

DIALECT_ID = "rmp"


class _RmpSink(FlatListSink):
    def __init__(self, package: Package, ids: IdSequence) -> None:
        super().__init__(DIALECT_ID)
        self.package = package
        self.ids = ids

    def add_media(self, media: Media, repeat_count: int) -> None:
        self.package.tracklist.tracks.append(Track(
            id=self.ids.next(),
            title=media.locator,
            file_name=media.locator,
        ))


class RmpDialect(BaseDialect):
    id = DIALECT_ID
    capabilities = FLAT_LIST

    @property
    def name(self) -> str:
        return "RealJukebox / RealPlayer package (RMP)"

    def parse(self, data, encoding=None) -> Package:
        return read_rmp(data, encoding=encoding)

    def serialize(self, model: Package, encoding=None, indent=None) -> bytes:
        return write_rmp(model, encoding=encoding, indent=indent)

    def to_playlist(self, model: Package) -> Sequence:
        children = []
        for track in model.tracklist.tracks:
            url = model.track_url(track)
            if not url:
                logger.debug("Skipping RMP track %r with an empty location", track.id)
                continue
            children.append(Media(locator=url))
        return Sequence(children=children)

    def new_export(self) -> Tuple[Package, FlatListSink]:
        ids = IdSequence()
        package = Package(
            title="{} RMP playlist".format(config.GENERATOR),
            action=config.RMP_DEFAULT_ACTION,
            target=ids.next(),
            provider=Provider(name=config.GENERATOR, url=config.GENERATOR_URL or None),
            tracklist=Tracklist(id=ids.next()),
        )
        return package, _RmpSink(package, ids)
