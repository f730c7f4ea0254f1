"""Object model of a RealJukebox / RealPlayer (RMP) package.

WHY: An RMP file does not list track URLs directly. A <SERVER> element
holds a LOCATION template, and each <TRACK> fills it in with its own
id and file name. The importer needs the whole package to rebuild each
track's URL.

HOW: Dataclasses mirroring PACKAGE / PROVIDER / SERVER / TRACKLIST /
TRACK. Track.duration_s is the content's natural length in seconds. It
is descriptive metadata, not a playback instruction.

RULES:
- SERVER, LOCATION and TRACKLIST are mandatory in a document
- Location placeholders: %lid list id, %pid package target, %fid track id,
  %f file name; a NETNAME prefixes "http://NETNAME"
- %fid must be substituted before %f
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from playlist_transcoder.config import RMP_DEFAULT_LOCATION


@dataclass
class Provider:
    author: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    copyright: Optional[str] = None
    contact: Optional[str] = None


@dataclass
class Server:
    name: Optional[str] = None
    desc: Optional[str] = None
    net_name: Optional[str] = None
    location: str = RMP_DEFAULT_LOCATION
    key: Optional[str] = None


@dataclass
class Track:
    id: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[str] = None
    file_name: Optional[str] = None
    size: Optional[int] = None
    format: Optional[str] = None
    duration_s: Optional[int] = None
    is_streaming: bool = False


@dataclass
class Tracklist:
    id: Optional[str] = None
    tracks: List[Track] = field(default_factory=list)


@dataclass
class Package:
    """The <PACKAGE> document root."""

    title: Optional[str] = None
    action: Optional[str] = None
    target: Optional[str] = None
    expiration_date: Optional[str] = None
    provider: Optional[Provider] = None
    server: Server = field(default_factory=Server)
    tracklist: Tracklist = field(default_factory=Tracklist)
    signature: Optional[str] = None

    def track_url(self, track: Track) -> str:
        """Expand the server location template for one track."""
        location = self.server.location
        location = location.replace("%lid", self.tracklist.id or "")
        location = location.replace("%pid", self.target or "")
        url = location.replace("%fid", track.id or "")
        url = url.replace("%f", track.file_name or "")
        if self.server.net_name is not None:
            url = "http://" + self.server.net_name + url
        return url
