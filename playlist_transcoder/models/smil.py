"""Object model of a SMIL (Synchronized Multimedia Integration Language) playlist.

WHY: SMIL is the most expressive dialect: nested seq/par time
containers, per-element durations in the SMIL clock grammar, repeat
counts that may be "indefinite", and a head with layout regions that
media elements are assigned to. The converter needs all of it typed.

HOW: Dataclasses for head, layout, regions and the body tree. Timing
attributes shared by every body element live in TimingAttributes.
Region assignment is inherited down the body tree; instead of parent
pointers, iter_smil_elements() walks top-down and hands each element
its effective region.

RULES:
- repeat_count uses IR values: 1 = once (attribute omitted), -1 =
  "indefinite"; fractional counts are truncated; other negatives mean
  indefinite
- dur is a ClockValue in the Extended grammar; "media" is stored as None
- The <body> element is itself a sequential container
- Media element names (ref, audio, video, ...) are kept so they can be
  written back unchanged
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

from playlist_transcoder.core.clock import ClockGrammar, ClockValue
from playlist_transcoder.errors import MalformedClockValueError

SMIL_GRAMMAR = ClockGrammar.EXTENDED

INDEFINITE = "indefinite"

MEDIA_TAGS = ("ref", "audio", "video", "img", "text", "textstream", "animation")
"""SMIL media object element names, all imported as IR Media."""


def parse_repeat_count(text: Optional[str]) -> int:
    """Decode a repeatCount attribute into an IR repeat count.

    Raises:
        ValueError: If the text is neither "indefinite" nor a finite number.
    """
    if text is None:
        return 1
    stripped = text.strip()
    if stripped.lower() == INDEFINITE:
        return -1
    value = float(stripped)
    if not math.isfinite(value):
        raise ValueError("repeatCount must be finite: {!r}".format(text))
    count = int(value)
    return -1 if count < 0 else count


def format_repeat_count(repeat_count: int) -> Optional[str]:
    """Encode an IR repeat count; None means "omit the attribute"."""
    if repeat_count == 1:
        return None
    if repeat_count < 0:
        return INDEFINITE
    return str(repeat_count)


def parse_duration(text: Optional[str]) -> Optional[ClockValue]:
    """Decode a dur attribute; None for absent or "media"."""
    if text is None:
        return None
    return ClockValue.parse(text, SMIL_GRAMMAR)


@dataclass
class Meta:
    name: Optional[str] = None
    content: Optional[str] = None


@dataclass
class Region:
    """A layout <region> that media elements can be rendered into."""

    id: Optional[str] = None
    region_name: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    background_color: Optional[str] = None


@dataclass
class Layout:
    type: Optional[str] = None
    regions: List[Region] = field(default_factory=list)

    def find_region(self, region_id: str) -> Optional[Region]:
        for region in self.regions:
            if region.id == region_id:
                return region
        return None


@dataclass
class Head:
    metas: List[Meta] = field(default_factory=list)
    layout: Optional[Layout] = None


@dataclass
class TimingAttributes:
    """Attributes common to every element of the SMIL body."""

    id: Optional[str] = None
    title: Optional[str] = None
    region: Optional[str] = None
    begin: Optional[str] = None
    end: Optional[str] = None
    dur: Optional[ClockValue] = None
    repeat_count: int = 1
    repeat_dur: Optional[str] = None

    def set_dur_millis(self, millis: Optional[int]) -> None:
        if millis is not None and millis < 0:
            raise MalformedClockValueError(str(millis), "negative duration")
        self.dur = None if millis is None else ClockValue(millis, SMIL_GRAMMAR)


@dataclass
class Reference:
    """A media object element (<ref>, <audio>, <video>, ...)."""

    tag: str = "ref"
    src: Optional[str] = None
    type: Optional[str] = None
    fill: Optional[str] = None
    timing: TimingAttributes = field(default_factory=TimingAttributes)

    def __post_init__(self) -> None:
        if self.src is not None:
            self.src = self.src.strip().replace("\\", "/")


@dataclass
class SequentialTiming:
    """A <seq> time container."""

    children: List["SmilElement"] = field(default_factory=list)
    timing: TimingAttributes = field(default_factory=TimingAttributes)


@dataclass
class ParallelTiming:
    """A <par> time container."""

    children: List["SmilElement"] = field(default_factory=list)
    timing: TimingAttributes = field(default_factory=TimingAttributes)


SmilElement = Union[SequentialTiming, ParallelTiming, Reference]


@dataclass
class Body(SequentialTiming):
    """The <body> element; plays its children in sequence."""


@dataclass
class Smil:
    """The <smil> document root."""

    head: Optional[Head] = None
    body: Optional[Body] = None


def iter_smil_elements(
    container: Union[SequentialTiming, ParallelTiming],
) -> Iterator[Tuple[SmilElement, Optional[str]]]:
    """Yield every element under container with its effective region.

    An element without its own region attribute inherits the region of
    the nearest ancestor that has one. The container itself is not
    yielded, but its region is inherited.
    """
    stack: List[Tuple[SmilElement, Optional[str]]] = [
        (child, container.timing.region) for child in reversed(container.children)
    ]
    while stack:
        element, inherited = stack.pop()
        region = element.timing.region or inherited
        yield element, region
        if isinstance(element, (SequentialTiming, ParallelTiming)):
            for child in reversed(element.children):
                stack.append((child, region))


def find_references_by_region(smil: Smil, region_id: str) -> List[Reference]:
    """All media elements rendered into the given region, in document order."""
    if smil.body is None:
        return []
    return [
        element
        for element, region in iter_smil_elements(smil.body)
        if isinstance(element, Reference) and region == region_id
    ]
