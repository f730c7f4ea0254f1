"""Per-dialect capability tables.

WHY: The dialects differ in what they can express: some cannot play
media concurrently, some cannot repeat forever, some have no repeat
element at all and some cannot time an individual item. The lowering
engine needs those facts as data so one algorithm serves every dialect.

RULES:
- supports_nested_repeat=False means repeats are achieved only by
  duplicating entries (loop unrolling)
- Tables are immutable and shared
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Capabilities:
    """Which IR constructs a dialect can represent natively."""

    supports_parallel: bool
    supports_infinite_repeat: bool
    supports_nested_repeat: bool
    supports_media_duration: bool


FLAT_LIST = Capabilities(
    supports_parallel=False,
    supports_infinite_repeat=False,
    supports_nested_repeat=False,
    supports_media_duration=False,
)
"""Shared table for dialects that are a plain list of tracks."""
