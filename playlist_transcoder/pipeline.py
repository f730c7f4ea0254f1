"""End-to-end conversion: playlist bytes in one dialect → bytes in another.

WHY: Callers (CLI front ends, services) want one call that turns an
uploaded playlist into another format, without knowing about models,
IR or capability tables. A failed conversion must raise, never return
a silently degraded playlist.

HOW: convert() looks up both dialects, parses the input into the
source model, imports it into IR, exports the IR into the target model
(capability check, normalization, lowering) and serializes it.
transcode() does the middle part for callers that already hold a model.

RULES:
- Any PlaylistError aborts the conversion and propagates unchanged
- encoding applies to the input, output_encoding to the output; both
  default to config.DEFAULT_ENCODING
- indent=None uses config.XML_INDENT
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

from playlist_transcoder.dialects import get_dialect
from playlist_transcoder.dialects.base import BaseDialect

logger = logging.getLogger(__name__)


def _resolve(dialect: Union[str, BaseDialect]) -> BaseDialect:
    if isinstance(dialect, BaseDialect):
        return dialect
    return get_dialect(dialect)


def transcode(model: Any, source: Union[str, BaseDialect], target: Union[str, BaseDialect]) -> Any:
    """Convert a source dialect model into a target dialect model.

    Args:
        model: A model of the source dialect (e.g. an Asx object).
        source: Source dialect id or instance.
        target: Target dialect id or instance.

    Returns:
        A new model of the target dialect.

    Raises:
        UnknownDialectError: If a dialect id is not registered.
        UnsupportedConstructError: If the target cannot express the playlist.
    """
    source_dialect = _resolve(source)
    target_dialect = _resolve(target)
    playlist = source_dialect.to_playlist(model)
    logger.debug("Imported %s playlist", source_dialect.id)
    result = target_dialect.from_playlist(playlist)
    logger.debug("Exported playlist to %s", target_dialect.id)
    return result


def convert(
    data: Union[bytes, str],
    source: str,
    target: str,
    *,
    encoding: Optional[str] = None,
    output_encoding: Optional[str] = None,
    indent: Optional[bool] = None,
) -> bytes:
    """Convert a playlist document from one dialect to another.

    Args:
        data: The source document, as bytes or already-decoded text.
        source: Source dialect id, e.g. "asx".
        target: Target dialect id, e.g. "smil".
        encoding: Character encoding of data when it is bytes.
        output_encoding: Character encoding of the returned document.
        indent: Pretty-print the output; None uses the configured default.

    Returns:
        The serialized target document.

    Raises:
        UnknownDialectError: If source or target is not registered.
        MalformedDocumentError: If data is not a valid source document.
        MissingRequiredFieldError: If data lacks a mandatory field.
        MalformedClockValueError: If a duration in data is malformed.
        UnsupportedConstructError: If the target cannot express the playlist.
    """
    source_dialect = get_dialect(source)
    target_dialect = get_dialect(target)
    logger.info("Converting %s playlist to %s", source_dialect.id, target_dialect.id)

    model = source_dialect.parse(data, encoding=encoding)
    result = transcode(model, source_dialect, target_dialect)
    output = target_dialect.serialize(result, encoding=output_encoding, indent=indent)

    logger.info("Converted %s → %s (%d bytes)", source_dialect.id, target_dialect.id, len(output))
    return output
