"""Structural simplification of an IR tree before export.

WHY: Importers translate literally, so their trees carry no-op
structure: zero-repeat nodes, containers emptied by dropped entries,
and plain sequences nested in sequences. Exporters would have to skip
all of it one by one; normalizing once keeps every exporter simpler.

HOW: A bottom-up rewrite that builds a new tree. Each child is
normalized first, then the parent decides whether to keep, drop, or
splice it.

RULES:
- A child with repeat_count == 0 is removed
- A Sequence/Parallel left with no children is removed
- A Sequence child with repeat_count == 1 inside a Sequence is spliced:
  its children replace it in order
- Parallel containers are never collapsed
- The root always survives; an empty or zero-repeat root becomes Sequence()
- No duration or media data is ever invented; the input is not mutated
"""

from __future__ import annotations

from typing import List, Optional

from playlist_transcoder.core.ir import Media, NodeDispatch, Parallel, PlaylistNode, Sequence


def _normalize_children(children: List[PlaylistNode], splice_sequences: bool) -> List[PlaylistNode]:
    result: List[PlaylistNode] = []
    for child in children:
        normalized = _prune(child)
        if normalized is None:
            continue
        if splice_sequences and isinstance(normalized, Sequence) and normalized.repeat_count == 1:
            result.extend(normalized.children)
        else:
            result.append(normalized)
    return result


def _prune_sequence(node: Sequence) -> Optional[PlaylistNode]:
    if node.repeat_count == 0:
        return None
    children = _normalize_children(node.children, splice_sequences=True)
    if not children:
        return None
    return Sequence(children=children, repeat_count=node.repeat_count)


def _prune_parallel(node: Parallel) -> Optional[PlaylistNode]:
    if node.repeat_count == 0:
        return None
    children = _normalize_children(node.children, splice_sequences=False)
    if not children:
        return None
    return Parallel(children=children, repeat_count=node.repeat_count)


def _prune_media(node: Media) -> Optional[PlaylistNode]:
    if node.repeat_count == 0:
        return None
    return Media(
        locator=node.locator,
        duration_ms=node.duration_ms,
        repeat_count=node.repeat_count,
        content_type=node.content_type,
    )


_prune = NodeDispatch({
    Sequence: _prune_sequence,
    Parallel: _prune_parallel,
    Media: _prune_media,
})


def normalize(node: PlaylistNode) -> PlaylistNode:
    """Return a simplified copy of the tree rooted at node.

    Args:
        node: Root of an IR tree, usually the Sequence built by an importer.

    Returns:
        A new tree. The root node is always returned; if nothing would
        survive, the result is an empty Sequence that plays once.
    """
    result = _prune(node)
    if result is None:
        return Sequence()
    return result
