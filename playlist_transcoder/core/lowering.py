"""Capability-checked lowering of an IR tree into a dialect model.

WHY: Every exporter faces the same decisions. Is a Parallel allowed?
Can this repeat be written natively, or must the entries be duplicated?
Is a per-item duration representable? Making those decisions once, from
the dialect's capability table, keeps the five exporters consistent and
means a construct is never dropped silently.

HOW: check_capabilities() scans the raw tree for constructs the target
can never hold. lower() then walks the normalized tree top-down and
calls a LoweringSink, which each dialect implements to build its own
model elements. When a repeat cannot be written natively at the
current depth, lower() unrolls it by lowering the subtree repeat_count
times into the same sink.

RULES:
- Parallel without supports_parallel → UnsupportedConstructError("parallel")
- repeat_count == -1 without supports_infinite_repeat, or where the
  repeat has to be unrolled → UnsupportedConstructError("infinite repeat")
- Media.duration_ms set without supports_media_duration →
  UnsupportedConstructError("timed media")
- repeat_count == 0 subtrees and Media with an empty locator contribute
  nothing and never raise
- Sinks receive repeat_count == 1 whenever the engine unrolled
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from playlist_transcoder.core.capabilities import Capabilities
from playlist_transcoder.core.ir import (
    ENTER,
    INDEFINITE_REPEAT,
    Media,
    NodeDispatch,
    Parallel,
    PlaylistNode,
    Sequence,
    walk,
)
from playlist_transcoder.errors import UnsupportedConstructError

PARALLEL = "parallel"
INFINITE_REPEAT = "infinite repeat"
TIMED_MEDIA = "timed media"


class LoweringSink(ABC):
    """Receives lowering decisions and builds dialect model elements.

    A sink stands for one container position in the target model (the
    document root, a repeat element, a seq element, ...). add_sequence
    and add_parallel return the sink that the container's children
    should be lowered into; a flat dialect simply returns itself.

    accepts_repeat may be False for a sink that cannot hold another
    native repeat construct, even though the dialect supports repeats
    elsewhere (e.g. an ASX <repeat> may only contain entries).
    """

    accepts_repeat = True

    @abstractmethod
    def add_sequence(self, repeat_count: int) -> "LoweringSink":
        """Open a sequential container repeated repeat_count times."""

    @abstractmethod
    def add_parallel(self, repeat_count: int) -> "LoweringSink":
        """Open a parallel container repeated repeat_count times."""

    @abstractmethod
    def add_media(self, media: Media, repeat_count: int) -> None:
        """Emit one media item repeated repeat_count times."""


def check_capabilities(
    node: PlaylistNode,
    capabilities: Capabilities,
    dialect: Optional[str] = None,
) -> None:
    """Reject structural constructs the target can never represent.

    Scans the whole tree, including subtrees that would later be dropped,
    so that a Parallel is rejected wherever it occurs.

    Raises:
        UnsupportedConstructError: For a Parallel or an infinite repeat
            the capability table does not allow.
    """
    for event, current in walk(node):
        if event != ENTER:
            continue
        if isinstance(current, Parallel) and not capabilities.supports_parallel:
            raise UnsupportedConstructError(PARALLEL, dialect)
        if current.repeat_count == INDEFINITE_REPEAT and not capabilities.supports_infinite_repeat:
            raise UnsupportedConstructError(INFINITE_REPEAT, dialect)


def _emit_sequence(node: Sequence, repeat_count: int, capabilities: Capabilities,
                   sink: LoweringSink, dialect: Optional[str]) -> None:
    child_sink = sink.add_sequence(repeat_count)
    for child in node.children:
        lower(child, capabilities, child_sink, dialect)


def _emit_parallel(node: Parallel, repeat_count: int, capabilities: Capabilities,
                   sink: LoweringSink, dialect: Optional[str]) -> None:
    child_sink = sink.add_parallel(repeat_count)
    for child in node.children:
        lower(child, capabilities, child_sink, dialect)


def _emit_media(node: Media, repeat_count: int, capabilities: Capabilities,
                sink: LoweringSink, dialect: Optional[str]) -> None:
    sink.add_media(node, repeat_count)


_emit = NodeDispatch({
    Sequence: _emit_sequence,
    Parallel: _emit_parallel,
    Media: _emit_media,
})


def lower(
    node: PlaylistNode,
    capabilities: Capabilities,
    sink: LoweringSink,
    dialect: Optional[str] = None,
) -> None:
    """Lower one IR node (and its subtree) into sink.

    Args:
        node: The node to lower, normally from a normalized tree.
        capabilities: The target dialect's capability table.
        sink: Where to emit model elements for this node.
        dialect: Dialect id used in error messages.

    Raises:
        UnsupportedConstructError: If the node needs a construct the
            target cannot express.
    """
    if node.repeat_count == 0:
        return
    if isinstance(node, Media):
        if not node.locator:
            return
        if node.duration_ms is not None and not capabilities.supports_media_duration:
            raise UnsupportedConstructError(TIMED_MEDIA, dialect)
    if isinstance(node, Parallel) and not capabilities.supports_parallel:
        raise UnsupportedConstructError(PARALLEL, dialect)
    if node.repeat_count == INDEFINITE_REPEAT and not capabilities.supports_infinite_repeat:
        raise UnsupportedConstructError(INFINITE_REPEAT, dialect)

    native_repeat = capabilities.supports_nested_repeat and sink.accepts_repeat
    if node.repeat_count == 1 or native_repeat:
        _emit(node, node.repeat_count, capabilities, sink, dialect)
        return

    # Loop unrolling: no native repeat here, so duplicate the entries.
    if node.repeat_count == INDEFINITE_REPEAT:
        raise UnsupportedConstructError(INFINITE_REPEAT, dialect)
    for _ in range(node.repeat_count):
        _emit(node, 1, capabilities, sink, dialect)
