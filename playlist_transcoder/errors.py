"""Error types raised by the playlist conversion pipeline.

WHY: A conversion either succeeds completely or fails loudly. Callers
(CLI front ends, services) need to tell a bad clock value from a
construct the target format cannot express, and both from a document
that is missing a mandatory field, so they can report each clearly.

HOW: One small hierarchy rooted at PlaylistError. Errors that describe
bad input values also subclass ValueError (and the registry miss
subclasses KeyError) so generic handlers keep working.

RULES:
- Every error aborts the single conversion in progress; nothing retries
- The core never catches its own errors to downgrade output
- Messages name the offending text, construct, or field
"""

from __future__ import annotations


class PlaylistError(Exception):
    """Base class for every error raised by playlist_transcoder."""


class MalformedClockValueError(PlaylistError, ValueError):
    """A clock value does not follow its grammar.

    Raised for a wrong field count, an out-of-range minute or second,
    a negative or non-numeric field, or a value that cannot be rendered
    in the requested grammar.
    """

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__("Invalid clock value {!r}: {}".format(text, reason))


class UnsupportedConstructError(PlaylistError):
    """The target dialect cannot represent a construct present in the IR.

    Attributes:
        construct: Short name of the construct, e.g. ``"parallel"``,
                   ``"infinite repeat"`` or ``"timed media"``.
        dialect: Id of the dialect that rejected it, when known.
    """

    def __init__(self, construct: str, dialect: str | None = None) -> None:
        self.construct = construct
        self.dialect = dialect
        if dialect:
            message = "{} playlists cannot express: {}".format(dialect, construct)
        else:
            message = "Unsupported construct: {}".format(construct)
        super().__init__(message)


class MissingRequiredFieldError(PlaylistError):
    """A field the dialect mandates is absent from a document or model."""

    def __init__(self, element: str, field: str) -> None:
        self.element = element
        self.field = field
        super().__init__("<{}> is missing required field {!r}".format(element, field))


class MalformedDocumentError(PlaylistError, ValueError):
    """The input is not well-formed XML, or has the wrong root element."""


class UnknownDialectError(PlaylistError, KeyError):
    """No dialect is registered under the requested id."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Unknown dialect"
