"""Object model of a Windows Media Player (WPL) playlist.

WPL borrows SMIL's outer shape (smil/head/body/seq) but only allows a
flat list of <media> elements in a single <seq>: no nesting, no repeat,
no timing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

ITEM_COUNT = "ItemCount"
GENERATOR = "Generator"


@dataclass
class Meta:
    name: Optional[str] = None
    content: Optional[str] = None


@dataclass
class Head:
    title: Optional[str] = None
    author: Optional[str] = None
    metas: List[Meta] = field(default_factory=list)

    def add_meta(self, name: str, content: str) -> None:
        self.metas.append(Meta(name=name, content=content))

    def find_meta(self, name: str) -> Optional[str]:
        for meta in self.metas:
            if meta.name == name:
                return meta.content
        return None


@dataclass
class Media:
    """A <media> element. src is required by the format."""

    src: str
    cid: Optional[str] = None
    tid: Optional[str] = None

    def __post_init__(self) -> None:
        self.src = self.src.strip().replace("\\", "/")


@dataclass
class Seq:
    medias: List[Media] = field(default_factory=list)


@dataclass
class Body:
    seq: Seq = field(default_factory=Seq)


@dataclass
class WplDocument:
    """The <smil> root of a WPL file."""

    head: Optional[Head] = None
    body: Optional[Body] = None
