"""Object model of a Hypetape playlist: <playlist> with <track id name mp3/> children."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Track:
    id: Optional[str] = None
    name: Optional[str] = None
    mp3: Optional[str] = None


@dataclass
class HypetapePlaylist:
    tracks: List[Track] = field(default_factory=list)
