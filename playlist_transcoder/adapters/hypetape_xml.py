"""XML binding for Hypetape playlists: <playlist><track id name mp3/></playlist>."""

from __future__ import annotations

from typing import Optional, Union

import lxml.etree

from playlist_transcoder.adapters.xml_binding import (
    add_child,
    attribute,
    find_children,
    parse_document,
    serialize_document,
    set_attribute,
)
from playlist_transcoder.models.hypetape import HypetapePlaylist, Track


def read_hypetape(data: Union[bytes, str], encoding: Optional[str] = None) -> HypetapePlaylist:
    root = parse_document(data, "playlist", encoding=encoding)
    playlist = HypetapePlaylist()
    for track in find_children(root, "track"):
        playlist.tracks.append(Track(
            id=attribute(track, "id"),
            name=attribute(track, "name"),
            mp3=attribute(track, "mp3"),
        ))
    return playlist


def write_hypetape(
    playlist: HypetapePlaylist,
    encoding: Optional[str] = None,
    indent: Optional[bool] = None,
) -> bytes:
    root = lxml.etree.Element("playlist")
    for track in playlist.tracks:
        element = add_child(root, "track")
        set_attribute(element, "id", track.id)
        set_attribute(element, "name", track.name)
        set_attribute(element, "mp3", track.mp3)
    return serialize_document(root, encoding=encoding, indent=indent)
