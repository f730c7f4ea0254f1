"""Intermediate representation (IR) of a playlist: a tree of timed nodes.

WHY: Five XML playlist dialects disagree on almost everything, but each
one can be described as media items composed in sequence or in parallel,
optionally repeated. Every conversion goes dialect → IR → dialect, so
adding a dialect means writing one importer and one exporter against
this tree, never against another dialect.

HOW: Three dataclasses form a tagged union:
  Sequence: children play one after another
  Parallel: children play at the same time
  Media:    a leaf that references one content item
NodeDispatch maps each variant to a handler and refuses incomplete
tables, and walk() yields (event, node) pairs for tree-wide queries.

RULES:
- repeat_count: 1 = once, 0 = contributes nothing, N > 0 = N times,
  INDEFINITE_REPEAT (-1) = forever; other negatives are rejected
- Media.duration_ms is None unless the source gave an explicit duration
- Children are owned exclusively; no parent pointers are stored
- Trees are built once, then treated as read-only
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

INDEFINITE_REPEAT = -1
"""repeat_count value meaning "repeat forever"."""

ENTER = "enter"
LEAVE = "leave"


def _check_repeat_count(repeat_count: int) -> None:
    if repeat_count < INDEFINITE_REPEAT:
        raise ValueError(
            "repeat_count must be >= 0 or {} (indefinite), got {}".format(
                INDEFINITE_REPEAT, repeat_count
            )
        )


@dataclass
class Sequence:
    """Children play in order, the whole block repeated repeat_count times."""

    children: List["PlaylistNode"] = field(default_factory=list)
    repeat_count: int = 1

    def __post_init__(self) -> None:
        _check_repeat_count(self.repeat_count)


@dataclass
class Parallel:
    """Children play concurrently, the whole block repeated repeat_count times."""

    children: List["PlaylistNode"] = field(default_factory=list)
    repeat_count: int = 1

    def __post_init__(self) -> None:
        _check_repeat_count(self.repeat_count)


@dataclass
class Media:
    """A reference to one content item.

    RULES:
    - locator: URL or path; an empty locator makes the node a no-op
    - duration_ms: explicit play duration, None when unspecified
    - content_type: optional MIME hint carried by some dialects (SMIL "type")
    """

    locator: str
    duration_ms: Optional[int] = None
    repeat_count: int = 1
    content_type: Optional[str] = None

    def __post_init__(self) -> None:
        _check_repeat_count(self.repeat_count)
        if self.duration_ms is not None and self.duration_ms < 0:
            raise ValueError("duration_ms must be non-negative, got {}".format(self.duration_ms))


PlaylistNode = Union[Sequence, Parallel, Media]

NODE_TYPES: Tuple[type, ...] = (Sequence, Parallel, Media)


class NodeDispatch:
    """Call the handler registered for a node's concrete variant.

    WHY: Importers, exporters and the normalizer all branch on the node
    variant. A table that must name all three variants makes a missing
    case an error when the module is imported rather than a silent
    fall-through at conversion time.

    HOW: Built from a mapping {variant class: handler}. Construction
    raises TypeError unless every class in NODE_TYPES has a handler.
    Calling the dispatcher forwards extra arguments to the handler.
    """

    def __init__(self, handlers: Mapping[type, Callable[..., Any]]) -> None:
        missing = [t.__name__ for t in NODE_TYPES if t not in handlers]
        if missing:
            raise TypeError("No handler for node type(s): {}".format(", ".join(missing)))
        unknown = [t for t in handlers if t not in NODE_TYPES]
        if unknown:
            raise TypeError("Not a playlist node type: {!r}".format(unknown))
        self._handlers: Dict[type, Callable[..., Any]] = dict(handlers)

    def __call__(self, node: PlaylistNode, *args: Any, **kwargs: Any) -> Any:
        try:
            handler = self._handlers[type(node)]
        except KeyError:
            raise TypeError("Not a playlist node: {!r}".format(node)) from None
        return handler(node, *args, **kwargs)


def is_container(node: PlaylistNode) -> bool:
    return isinstance(node, (Sequence, Parallel))


def walk(node: PlaylistNode) -> Iterator[Tuple[str, PlaylistNode]]:
    """Lazily yield ("enter", node) and ("leave", node) for the whole tree.

    Pre-order is the sequence of "enter" events, post-order the sequence
    of "leave" events. Uses an explicit stack, so deep trees do not hit
    the recursion limit.
    """
    stack: List[Tuple[bool, PlaylistNode]] = [(False, node)]
    while stack:
        leaving, current = stack.pop()
        if leaving:
            yield LEAVE, current
            continue
        yield ENTER, current
        stack.append((True, current))
        if is_container(current):
            for child in reversed(current.children):
                stack.append((False, child))


def iter_media(node: PlaylistNode) -> Iterator[Media]:
    """All Media leaves in document order."""
    for event, current in walk(node):
        if event == ENTER and isinstance(current, Media):
            yield current
