"""Clock-value codec for the two duration grammars used by playlist dialects.

WHY: Durations and time offsets appear as text in playlist attributes,
but not in one format. ASX-style playlists write a fixed
``hh:mm:ss[.fff]`` clock, while SMIL-style playlists accept full and
partial clocks, metric timecounts ("2min", "500ms") and the literals
"indefinite" and "media". Every dialect model needs to read its own
grammar and write it back, so the parsing rules live in one place.

HOW: parse_clock/format_clock take a ClockGrammar tag and work on a
millisecond count. ClockValue bundles a count with the grammar it should
be rendered in. The colon forms of both grammars share one field parser.

RULES:
- Simple: exactly three fields; minutes and seconds in [0, 59]
- Fractions are right-padded to 3 digits, and truncated past 3
- Extended metric suffixes: h, min, ms, s (or none = seconds);
  "min" and "ms" are tested before the looser "s"
- "indefinite" → INDEFINITE_DURATION, "media" → None (no explicit duration)
- Extended render: sentinel → "indefinite"; < 1 hour → "<seconds>s";
  otherwise the full colon form
- Anything malformed raises MalformedClockValueError; no clamping
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import List, Optional

from playlist_transcoder.errors import MalformedClockValueError

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

INDEFINITE_DURATION = 2 ** 63 - 1
"""Reserved millisecond count meaning "lasts forever" (SMIL "indefinite")."""

_INDEFINITE = "indefinite"
_MEDIA = "media"

# Metric suffixes in match order: "min" and "ms" must win over "s".
_METRICS = (
    ("min", MS_PER_MINUTE),
    ("ms", 1),
    ("h", MS_PER_HOUR),
    ("s", MS_PER_SECOND),
)

_DIGITS_RE = re.compile(r"^[0-9]+$")
_TIMECOUNT_RE = re.compile(r"^(?P<whole>[0-9]+)(?:\.(?P<fraction>[0-9]+))?$")


class ClockGrammar(enum.Enum):
    """Which textual grammar a clock value is written in."""

    SIMPLE = "simple"
    EXTENDED = "extended"


def _parse_int(text: str, field: str, original: str) -> int:
    if not _DIGITS_RE.match(text):
        raise MalformedClockValueError(original, "{} is not a non-negative integer".format(field))
    return int(text)


def _parse_fraction(text: str, original: str) -> int:
    """Turn a fractional-seconds string into milliseconds ("5" → 500)."""
    if not _DIGITS_RE.match(text):
        raise MalformedClockValueError(original, "fraction is not numeric")
    return int((text + "00")[:3])


def _parse_colon_fields(fields: List[str], original: str) -> int:
    """Parse [hours, ]minutes, seconds[.fraction] into milliseconds."""
    hours = 0
    if len(fields) == 3:
        hours = _parse_int(fields[0].strip(), "hours", original)
        fields = fields[1:]

    minutes = _parse_int(fields[0].strip(), "minutes", original)
    if minutes > 59:
        raise MalformedClockValueError(original, "minutes out of range [0, 59]")

    seconds_parts = fields[1].strip().split(".")
    if len(seconds_parts) > 2:
        raise MalformedClockValueError(original, "too many '.' in seconds")
    seconds = _parse_int(seconds_parts[0], "seconds", original)
    if seconds > 59:
        raise MalformedClockValueError(original, "seconds out of range [0, 59]")

    millis = 0
    if len(seconds_parts) == 2:
        millis = _parse_fraction(seconds_parts[1], original)

    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND + millis


def _parse_timecount(text: str, original: str) -> int:
    """Parse a SMIL timecount such as "2min", "1.5s", "500ms" or "12"."""
    lowered = text.lower()
    multiplier = MS_PER_SECOND
    for suffix, factor in _METRICS:
        if lowered.endswith(suffix):
            lowered = lowered[: -len(suffix)]
            multiplier = factor
            break

    match = _TIMECOUNT_RE.match(lowered)
    if match is None:
        raise MalformedClockValueError(original, "not a timecount value")

    whole = int(match.group("whole"))
    fraction = match.group("fraction") or ""
    # Exact integer arithmetic; the result is truncated toward zero.
    scale = 10 ** len(fraction)
    numerator = whole * scale + (int(fraction) if fraction else 0)
    return (numerator * multiplier) // scale


def parse_clock(text: str, grammar: ClockGrammar) -> Optional[int]:
    """Parse a clock value into a millisecond count.

    Args:
        text: The attribute text, surrounding whitespace allowed.
        grammar: Which grammar the text is written in.

    Returns:
        The millisecond count. For the Extended grammar, "indefinite"
        returns INDEFINITE_DURATION and "media" returns None.

    Raises:
        MalformedClockValueError: If the text violates the grammar.
    """
    if text is None:
        raise MalformedClockValueError("None", "no clock value given")
    stripped = text.strip()
    if not stripped:
        raise MalformedClockValueError(text, "empty clock value")

    fields = stripped.split(":")

    if grammar is ClockGrammar.SIMPLE:
        if len(fields) != 3:
            raise MalformedClockValueError(text, "expected hh:mm:ss[.fff]")
        return _parse_colon_fields(fields, text)

    lowered = stripped.lower()
    if lowered == _INDEFINITE:
        return INDEFINITE_DURATION
    if lowered == _MEDIA:
        return None
    if len(fields) in (2, 3):
        return _parse_colon_fields(fields, text)
    if len(fields) == 1:
        return _parse_timecount(stripped, text)
    raise MalformedClockValueError(text, "too many ':' separated fields")


def _render_seconds(millis: int, pad: bool) -> str:
    seconds, remainder = divmod(millis, MS_PER_SECOND)
    text = "{:02d}".format(seconds) if pad else str(seconds)
    if remainder:
        text += ".{:03d}".format(remainder)
    return text


def _render_colon(millis: int) -> str:
    hours, millis = divmod(millis, MS_PER_HOUR)
    minutes, millis = divmod(millis, MS_PER_MINUTE)
    return "{:02d}:{:02d}:{}".format(hours, minutes, _render_seconds(millis, pad=True))


def format_clock(millis: int, grammar: ClockGrammar) -> str:
    """Render a millisecond count in the given grammar.

    Raises:
        MalformedClockValueError: If the count is negative, or is the
            indefinite sentinel and the grammar is Simple.
    """
    if millis < 0:
        raise MalformedClockValueError(str(millis), "negative duration")

    if millis == INDEFINITE_DURATION:
        if grammar is ClockGrammar.SIMPLE:
            raise MalformedClockValueError(_INDEFINITE, "simple clocks cannot be indefinite")
        return _INDEFINITE

    if grammar is ClockGrammar.EXTENDED and millis < MS_PER_HOUR:
        return _render_seconds(millis, pad=False) + "s"
    return _render_colon(millis)


@dataclass(frozen=True)
class ClockValue:
    """A non-negative millisecond count tagged with its rendering grammar.

    WHY: A duration read from one dialect must be written back in the
    *target* dialect's grammar, never in the grammar it was read in.
    Keeping the grammar next to the count makes that choice explicit.

    RULES:
    - millis is never negative
    - render_as() returns a copy bound to another grammar; the count is kept
    """

    millis: int
    grammar: ClockGrammar = ClockGrammar.SIMPLE

    def __post_init__(self) -> None:
        if self.millis < 0:
            raise MalformedClockValueError(str(self.millis), "negative duration")

    @classmethod
    def parse(cls, text: str, grammar: ClockGrammar) -> Optional["ClockValue"]:
        """Parse text; returns None for the Extended "media" literal."""
        millis = parse_clock(text, grammar)
        if millis is None:
            return None
        return cls(millis, grammar)

    @property
    def is_indefinite(self) -> bool:
        return self.millis == INDEFINITE_DURATION

    def render_as(self, grammar: ClockGrammar) -> "ClockValue":
        return ClockValue(self.millis, grammar)

    def __str__(self) -> str:
        return format_clock(self.millis, self.grammar)
