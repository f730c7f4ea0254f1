"""Abstract base dialect: importer, exporter and XML binding behind one interface.

WHY: The pipeline converts between any pair of dialects. It must be able
to treat every dialect the same way: read bytes into a model, turn the
model into IR, turn IR into a model, and write the model back out.

HOW: BaseDialect is an ABC. Subclasses declare an id, a human-readable
name and a capability table, and implement parse/serialize (delegating to
their XML adapter), to_playlist (the importer) and the two export hooks
new_export() and lower_root(). from_playlist() is the shared exporter
template: capability pre-check, one normalization, then lowering into
the sink returned by new_export().

RULES:
- to_playlist() returns a Sequence root and does not normalize
- from_playlist() validates the raw tree before normalizing, so a
  Parallel is rejected even inside a subtree that would be dropped
- Synthetic ids come from an IdSequence created per export

To add a new dialect:
1. Create a model in models/ and an adapter in adapters/
2. Subclass BaseDialect here in dialects/
3. Register it in DIALECTS in dialects/__init__.py
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union

from playlist_transcoder.core.capabilities import Capabilities
from playlist_transcoder.core.ir import PlaylistNode, Sequence
from playlist_transcoder.core.lowering import PARALLEL, LoweringSink, check_capabilities, lower
from playlist_transcoder.core.normalizer import normalize
from playlist_transcoder.errors import UnsupportedConstructError


class IdSequence:
    """Monotonic string identifiers for one export: "1", "2", "3", ..."""

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def next(self) -> str:
        return str(next(self._counter))


class BaseDialect(ABC):
    """Abstract base for all playlist dialects."""

    id: str = ""
    capabilities: Capabilities

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable dialect name, e.g. 'Windows Media Player'."""

    @abstractmethod
    def parse(self, data: Union[bytes, str], encoding: Optional[str] = None) -> Any:
        """Parse XML text into this dialect's model.

        Raises:
            MalformedDocumentError: If the text is not a document of this dialect.
            MissingRequiredFieldError: If a mandatory field is absent.
        """

    @abstractmethod
    def serialize(self, model: Any, encoding: Optional[str] = None, indent: Optional[bool] = None) -> bytes:
        """Serialize a model of this dialect into XML bytes."""

    @abstractmethod
    def to_playlist(self, model: Any) -> Sequence:
        """Import a model into an IR tree rooted at a Sequence."""

    @abstractmethod
    def new_export(self) -> Tuple[Any, LoweringSink]:
        """Create an empty model and the sink that fills its top level."""

    def lower_root(self, root: PlaylistNode, capabilities: Capabilities, sink: LoweringSink) -> None:
        """Lower the normalized root into the top-level sink."""
        lower(root, capabilities, sink, self.id)

    def finish_export(self, model: Any) -> None:
        """Fill in summary fields once every item has been emitted."""

    def from_playlist(self, node: PlaylistNode, capabilities: Optional[Capabilities] = None) -> Any:
        """Export an IR tree into a new model of this dialect.

        Args:
            node: Root of the IR tree. It is not modified.
            capabilities: Table to lower against; defaults to the
                          dialect's own.

        Returns:
            The dialect model.

        Raises:
            UnsupportedConstructError: If the tree needs a construct the
                capability table does not allow.
        """
        caps = capabilities if capabilities is not None else self.capabilities
        check_capabilities(node, caps, self.id)
        root = normalize(node)
        model, sink = self.new_export()
        self.lower_root(root, caps, sink)
        self.finish_export(model)
        return model


class FlatListSink(LoweringSink):
    """Sink for dialects that are a plain list of tracks.

    Containers add no element: their children land in the same list.
    Subclasses implement add_media(). The lowering engine has already
    unrolled repeats, so repeat_count is always 1 here.
    """

    accepts_repeat = False

    def __init__(self, dialect: str) -> None:
        self.dialect = dialect

    def add_sequence(self, repeat_count: int) -> LoweringSink:
        return self

    def add_parallel(self, repeat_count: int) -> LoweringSink:
        raise UnsupportedConstructError(PARALLEL, self.dialect)
