"""Object model of an ASX (Advanced Stream Redirector) playlist.

WHY: ASX documents carry more than a track list: entries with several
alternative references, per-entry and per-reference durations, repeat
blocks, and metadata (title, author, named params). The importer and
exporter work on this typed graph, never on raw XML.

HOW: Plain dataclasses mirroring the schema. Durations are ClockValue
objects in the Simple grammar. Repeat.count uses the ASX encoding:
the number of *extra* plays, with None meaning "forever".

RULES:
- Asx.elements holds Entry, Entryref and Repeat; Repeat holds only
  Entry and Entryref (add_element enforces both)
- Params are an ordered name → value dict, last write wins
- Repeat.count: None = indefinite, N = play N + 1 times; a negative
  count is stored as None
- Boolean flags are written only when they differ from the default
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from playlist_transcoder.core.clock import ClockGrammar, ClockValue, parse_clock

ASX_GRAMMAR = ClockGrammar.SIMPLE


def parse_duration(text: str) -> ClockValue:
    """Parse an ASX duration attribute ("00:03:25.5")."""
    return ClockValue(parse_clock(text, ASX_GRAMMAR), ASX_GRAMMAR)


def duration_from_millis(millis: int) -> ClockValue:
    return ClockValue(millis, ASX_GRAMMAR)


@dataclass
class Metadata:
    """Descriptive fields shared by <asx> and <entry>."""

    title: Optional[str] = None
    author: Optional[str] = None
    copyright: Optional[str] = None
    abstract: Optional[str] = None
    base: Optional[str] = None
    more_info: Optional[str] = None
    params: Dict[str, str] = field(default_factory=dict)

    def add_param(self, name: str, value: str) -> None:
        """Set a named param; a later param with the same name replaces it."""
        self.params[name.strip()] = value.strip()

    def find_param_value(self, name: str) -> Optional[str]:
        return self.params.get(name)


@dataclass
class Reference:
    """One <ref>: an alternative location for an entry's content."""

    href: Optional[str] = None
    duration: Optional[ClockValue] = None
    start_time: Optional[ClockValue] = None


@dataclass
class Entry:
    """One <entry>: a logical item with fallback references."""

    references: List[Reference] = field(default_factory=list)
    duration: Optional[ClockValue] = None
    start_time: Optional[ClockValue] = None
    client_skip: bool = True
    skip_if_ref: bool = False
    metadata: Metadata = field(default_factory=Metadata)

    def add_reference(self, reference: Reference) -> None:
        self.references.append(reference)


@dataclass
class Entryref:
    """One <entryref>: a reference to another ASX playlist."""

    href: Optional[str] = None


@dataclass
class Repeat:
    """One <repeat>: plays its entries count + 1 times, or forever."""

    count: Optional[int] = None
    elements: List[Union[Entry, Entryref]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.set_count(self.count)

    def set_count(self, count: Optional[int]) -> None:
        self.count = None if count is None or count < 0 else count

    def add_element(self, element: Union[Entry, Entryref]) -> None:
        if not isinstance(element, (Entry, Entryref)):
            raise ValueError("Element not valid inside <repeat>: {!r}".format(element))
        self.elements.append(element)


AsxElement = Union[Entry, Entryref, Repeat]


@dataclass
class Asx:
    """The <asx> document root."""

    version: str = "3.0"
    preview_mode: bool = False
    banner_bar: Optional[str] = None
    metadata: Metadata = field(default_factory=Metadata)
    elements: List[AsxElement] = field(default_factory=list)

    def add_element(self, element: AsxElement) -> None:
        if not isinstance(element, (Entry, Entryref, Repeat)):
            raise ValueError("Element not valid inside <asx>: {!r}".format(element))
        self.elements.append(element)
