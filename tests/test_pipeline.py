"""End-to-end tests for convert() and the dialect registry.

WHY: convert() is what callers use. These tests push the sample
documents through every supported direction that should succeed, and
check that every direction that cannot succeed fails with a clear error
instead of a degraded playlist.
"""

import pytest

from playlist_transcoder.core.ir import Media, Sequence
from playlist_transcoder.dialects import DIALECTS, get_dialect
from playlist_transcoder.dialects.asx import AsxDialect
from playlist_transcoder.dialects.base import BaseDialect
from playlist_transcoder.errors import (
    MalformedDocumentError,
    PlaylistError,
    UnknownDialectError,
    UnsupportedConstructError,
)
from playlist_transcoder.pipeline import convert, transcode

from conftest import ASX_SAMPLE, HYPETAPE_SAMPLE, RMP_SAMPLE, SMIL_SAMPLE, WPL_SAMPLE


class TestRegistry:
    """Dialect lookup by id."""

    def test_all_dialects_registered(self):
        assert set(DIALECTS) == {"asx", "smil", "wpl", "rmp", "hypetape"}

    @pytest.mark.parametrize("dialect_id", sorted(DIALECTS))
    def test_ids_match_keys(self, dialect_id):
        dialect = get_dialect(dialect_id)
        assert isinstance(dialect, BaseDialect)
        assert dialect.id == dialect_id
        assert dialect.name

    def test_lookup_is_case_insensitive(self):
        assert isinstance(get_dialect("ASX"), AsxDialect)

    def test_unknown_dialect(self):
        with pytest.raises(UnknownDialectError) as exc_info:
            get_dialect("m3u")
        assert isinstance(exc_info.value, KeyError)
        assert "m3u" in str(exc_info.value)


class TestConvert:
    """bytes → bytes conversions."""

    def test_asx_to_smil(self, asx_sample_playlist):
        data = convert(ASX_SAMPLE, "asx", "smil")
        smil = get_dialect("smil")
        assert smil.to_playlist(smil.parse(data)) == asx_sample_playlist

    def test_asx_to_smil_duration_grammar(self):
        data = convert(ASX_SAMPLE, "asx", "smil")
        assert b'dur="205.500s"' in data

    def test_smil_to_asx_rejects_parallel(self):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            convert(SMIL_SAMPLE, "smil", "asx")
        assert exc_info.value.construct == "parallel"
        assert exc_info.value.dialect == "asx"

    def test_asx_to_wpl_rejects_infinite_repeat(self):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            convert(ASX_SAMPLE, "asx", "wpl")
        assert exc_info.value.construct == "infinite repeat"

    def test_rmp_to_hypetape(self):
        data = convert(RMP_SAMPLE, "rmp", "hypetape")
        hypetape = get_dialect("hypetape")
        assert [media.locator for media in hypetape.to_playlist(hypetape.parse(data)).children] == [
            "http://media.example.com/lists/7/1/one.rm",
            "http://media.example.com/lists/7/2/two.rm",
        ]

    @pytest.mark.parametrize("source,data", [
        ("wpl", WPL_SAMPLE),
        ("rmp", RMP_SAMPLE),
        ("hypetape", HYPETAPE_SAMPLE),
    ])
    @pytest.mark.parametrize("target", sorted(DIALECTS))
    def test_flat_sources_convert_everywhere(self, source, data, target):
        output = convert(data, source, target)
        source_dialect, target_dialect = get_dialect(source), get_dialect(target)
        expected = source_dialect.to_playlist(source_dialect.parse(data))
        assert target_dialect.to_playlist(target_dialect.parse(output)) == expected

    def test_text_input_and_output_encoding(self):
        data = convert(HYPETAPE_SAMPLE.decode("utf-8"), "hypetape", "asx", output_encoding="UTF-16")
        assert AsxDialect().parse(data, encoding="UTF-16").elements

    def test_input_encoding(self):
        data = '<playlist><track mp3="chanson-é.mp3"/></playlist>'.encode("iso-8859-1")
        output = convert(data, "hypetape", "wpl", encoding="ISO-8859-1")
        assert "chanson-é.mp3".encode("utf-8") in output

    def test_indent(self):
        compact = convert(HYPETAPE_SAMPLE, "hypetape", "smil", indent=False)
        pretty = convert(HYPETAPE_SAMPLE, "hypetape", "smil", indent=True)
        assert b"\n  <body>" in pretty
        assert b"<smil><body>" in compact

    def test_malformed_input(self):
        with pytest.raises(MalformedDocumentError):
            convert(b"this is not xml", "asx", "smil")

    def test_wrong_dialect_for_document(self):
        with pytest.raises(MalformedDocumentError):
            convert(SMIL_SAMPLE, "asx", "wpl")

    def test_infinite_numeric_repeat_count(self):
        with pytest.raises(MalformedDocumentError):
            convert('<smil><body><ref src="a.mp3" repeatCount="inf"/></body></smil>', "smil", "smil")

    def test_unknown_target(self):
        with pytest.raises(UnknownDialectError):
            convert(ASX_SAMPLE, "asx", "xspf")

    def test_errors_share_a_base(self):
        with pytest.raises(PlaylistError):
            convert(SMIL_SAMPLE, "smil", "rmp")


class TestTranscode:
    """In-memory model → model conversion."""

    def test_asx_model_to_hypetape_model(self):
        asx = AsxDialect().parse(
            b'<asx><repeat count="1"><entry><ref href="a.mp3"/></entry></repeat></asx>'
        )
        playlist = transcode(asx, "asx", "hypetape")
        assert [track.mp3 for track in playlist.tracks] == ["a.mp3", "a.mp3"]

    def test_accepts_dialect_instances(self):
        model = transcode(
            get_dialect("wpl").from_playlist(Sequence([Media("x.mp3")])),
            get_dialect("wpl"),
            get_dialect("smil"),
        )
        assert model.body.children[0].src == "x.mp3"
