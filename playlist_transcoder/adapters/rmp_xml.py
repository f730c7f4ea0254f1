"""XML binding for RealJukebox / RealPlayer (RMP) packages.

WHY: RMP element names are upper case (<PACKAGE>, <TRACKLIST>, ...) and
every field is an element with text content, never an attribute. Sizes
and durations are integer text; IS_STREAMING is a yes/no flag.

RULES:
- <SERVER>, its <LOCATION> and <TRACKLIST> are mandatory on read
- Non-integer SIZE or DURATION text → MalformedDocumentError
- IS_STREAMING is true for "1", "true" or "yes" (any case)
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import lxml.etree

from playlist_transcoder.adapters.xml_binding import (
    add_child,
    add_text_child,
    child_text,
    find_child,
    find_children,
    local_name,
    parse_document,
    required_child,
    serialize_document,
)
from playlist_transcoder.errors import MalformedDocumentError, MissingRequiredFieldError
from playlist_transcoder.models.rmp import Package, Provider, Server, Track, Tracklist

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes")


def _int_child(element: lxml.etree._Element, name: str) -> Optional[int]:
    text = child_text(element, name)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError as e:
        raise MalformedDocumentError(
            "<{}> must be an integer, got {!r}".format(name, text)
        ) from e


def _read_provider(element: lxml.etree._Element) -> Provider:
    return Provider(
        author=child_text(element, "AUTHOR"),
        name=child_text(element, "NAME"),
        url=child_text(element, "URL"),
        copyright=child_text(element, "COPYRIGHT"),
        contact=child_text(element, "CONTACT"),
    )


def _read_server(element: lxml.etree._Element) -> Server:
    location = child_text(element, "LOCATION")
    if location is None:
        raise MissingRequiredFieldError(local_name(element), "LOCATION")
    return Server(
        name=child_text(element, "NAME"),
        desc=child_text(element, "DESC"),
        net_name=child_text(element, "NETNAME"),
        location=location,
        key=child_text(element, "KEY"),
    )


def _read_track(element: lxml.etree._Element) -> Track:
    streaming = child_text(element, "IS_STREAMING") or ""
    return Track(
        id=child_text(element, "TRACKID"),
        url=child_text(element, "URL"),
        title=child_text(element, "TITLE"),
        album=child_text(element, "ALBUM"),
        artist=child_text(element, "ARTIST"),
        genre=child_text(element, "GENRE"),
        file_name=child_text(element, "FILENAME"),
        size=_int_child(element, "SIZE"),
        format=child_text(element, "FORMAT"),
        duration_s=_int_child(element, "DURATION"),
        is_streaming=streaming.lower() in _TRUE_VALUES,
    )


def read_rmp(data: Union[bytes, str], encoding: Optional[str] = None) -> Package:
    """Parse RMP text into a Package model."""
    root = parse_document(data, "PACKAGE", encoding=encoding)
    package = Package(
        title=child_text(root, "TITLE"),
        action=child_text(root, "ACTION"),
        target=child_text(root, "TARGET"),
        expiration_date=child_text(root, "EXP_DATE"),
        signature=child_text(root, "SIG"),
    )
    provider = find_child(root, "PROVIDER")
    if provider is not None:
        package.provider = _read_provider(provider)
    package.server = _read_server(required_child(root, "SERVER"))
    tracklist = required_child(root, "TRACKLIST")
    package.tracklist = Tracklist(id=child_text(tracklist, "LISTID"))
    for track in find_children(tracklist, "TRACK"):
        package.tracklist.tracks.append(_read_track(track))
    logger.debug("Read RMP package with %d tracks", len(package.tracklist.tracks))
    return package


def _write_track(parent: lxml.etree._Element, track: Track) -> None:
    element = add_child(parent, "TRACK")
    add_text_child(element, "TRACKID", track.id)
    add_text_child(element, "URL", track.url)
    add_text_child(element, "TITLE", track.title)
    add_text_child(element, "ALBUM", track.album)
    add_text_child(element, "ARTIST", track.artist)
    add_text_child(element, "GENRE", track.genre)
    add_text_child(element, "FILENAME", track.file_name)
    add_text_child(element, "SIZE", track.size)
    add_text_child(element, "FORMAT", track.format)
    add_text_child(element, "DURATION", track.duration_s)
    if track.is_streaming:
        add_child(element, "IS_STREAMING", "true")


def write_rmp(package: Package, encoding: Optional[str] = None, indent: Optional[bool] = None) -> bytes:
    """Serialize a Package model to XML bytes."""
    root = lxml.etree.Element("PACKAGE")
    add_text_child(root, "ACTION", package.action)
    add_text_child(root, "TITLE", package.title)
    add_text_child(root, "TARGET", package.target)
    add_text_child(root, "EXP_DATE", package.expiration_date)
    if package.provider is not None:
        provider = add_child(root, "PROVIDER")
        add_text_child(provider, "AUTHOR", package.provider.author)
        add_text_child(provider, "NAME", package.provider.name)
        add_text_child(provider, "URL", package.provider.url)
        add_text_child(provider, "COPYRIGHT", package.provider.copyright)
        add_text_child(provider, "CONTACT", package.provider.contact)

    server = add_child(root, "SERVER")
    add_text_child(server, "NAME", package.server.name)
    add_text_child(server, "DESC", package.server.desc)
    add_text_child(server, "NETNAME", package.server.net_name)
    add_child(server, "LOCATION", package.server.location)
    add_text_child(server, "KEY", package.server.key)

    tracklist = add_child(root, "TRACKLIST")
    add_text_child(tracklist, "LISTID", package.tracklist.id)
    for track in package.tracklist.tracks:
        _write_track(tracklist, track)
    add_text_child(root, "SIG", package.signature)
    return serialize_document(root, encoding=encoding, indent=indent)
