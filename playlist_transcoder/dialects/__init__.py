"""Dialect registry: one lookup for every supported playlist format.

WHY: The pipeline converts between any two dialects by id. A central
dict makes adding a format a matter of writing the dialect class,
importing it here and adding one line.

HOW: DIALECTS maps dialect ids to dialect *classes* (not instances).
get_dialect() instantiates the class for an id.

RULES:
- Keys are the lower-case dialect ids used by convert()
- Values are BaseDialect subclasses
- The dict is built at import and never mutated
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from playlist_transcoder.dialects.asx import AsxDialect
from playlist_transcoder.dialects.hypetape import HypetapeDialect
from playlist_transcoder.dialects.rmp import RmpDialect
from playlist_transcoder.dialects.smil import SmilDialect
from playlist_transcoder.dialects.wpl import WplDialect
from playlist_transcoder.errors import UnknownDialectError

if TYPE_CHECKING:
    from playlist_transcoder.dialects.base import BaseDialect

DIALECTS: dict[str, type[BaseDialect]] = {
    "asx": AsxDialect,
    "smil": SmilDialect,
    "wpl": WplDialect,
    "rmp": RmpDialect,
    "hypetape": HypetapeDialect,
}


def get_dialect(dialect_id: str) -> BaseDialect:
    """Return a new instance of the dialect registered under dialect_id.

    Raises:
        UnknownDialectError: If no dialect has that id.
    """
    try:
        dialect_cls = DIALECTS[dialect_id.lower()]
    except KeyError:
        raise UnknownDialectError(
            "Unknown dialect {!r} (known: {})".format(dialect_id, ", ".join(sorted(DIALECTS)))
        ) from None
    return dialect_cls()
