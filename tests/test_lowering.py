"""Unit tests for the capability-checked lowering engine.

WHY: The lowering engine decides, for every dialect, whether a
construct is written natively, unrolled, dropped or rejected. These
tests drive it with a recording sink so the decisions can be checked
without any dialect model in the way.
"""

import pytest

from playlist_transcoder.core.capabilities import FLAT_LIST, Capabilities
from playlist_transcoder.core.ir import Media, Parallel, Sequence
from playlist_transcoder.core.lowering import LoweringSink, check_capabilities, lower
from playlist_transcoder.core.normalizer import normalize
from playlist_transcoder.errors import UnsupportedConstructError

FULL = Capabilities(
    supports_parallel=True,
    supports_infinite_repeat=True,
    supports_nested_repeat=True,
    supports_media_duration=True,
)


class RecordingSink(LoweringSink):
    """Records every call as a nested list of tuples."""

    def __init__(self, accepts_repeat=True):
        self.accepts_repeat = accepts_repeat
        self.calls = []

    def add_sequence(self, repeat_count):
        child = RecordingSink(self.accepts_repeat)
        self.calls.append(("seq", repeat_count, child.calls))
        return child

    def add_parallel(self, repeat_count):
        child = RecordingSink(self.accepts_repeat)
        self.calls.append(("par", repeat_count, child.calls))
        return child

    def add_media(self, media, repeat_count):
        self.calls.append(("media", media.locator, repeat_count))


def _flat_locators(calls):
    locators = []
    for call in calls:
        if call[0] == "media":
            locators.extend([call[1]] * call[2])
        else:
            locators.extend(_flat_locators(call[2]))
    return locators


def _export(tree, capabilities, sink=None):
    sink = sink or RecordingSink()
    check_capabilities(tree, capabilities)
    lower(normalize(tree), capabilities, sink)
    return sink


class TestParallel:
    """A Parallel is rejected wherever it occurs in a no-parallel target."""

    @pytest.mark.parametrize("tree", [
        Parallel([Media("a")]),
        Sequence([Media("a"), Sequence([Parallel([Media("b")])], repeat_count=3)]),
        Sequence([Sequence([Parallel([Media("b")])], repeat_count=0)]),
        Sequence([Parallel([])]),
    ])
    def test_rejected_anywhere(self, tree):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            _export(tree, FLAT_LIST)
        assert exc_info.value.construct == "parallel"

    def test_native_when_supported(self):
        sink = _export(Sequence([Parallel([Media("a"), Media("b")])]), FULL)
        assert sink.calls == [("seq", 1, [("par", 1, [("media", "a", 1), ("media", "b", 1)])])]


class TestRepeat:
    """Native repeats versus loop unrolling."""

    def test_unrolled_without_nested_repeat(self):
        sink = _export(Sequence([Media("a.mp3")], repeat_count=3), FLAT_LIST)
        assert _flat_locators(sink.calls) == ["a.mp3", "a.mp3", "a.mp3"]

    def test_unrolled_media_repeat(self):
        sink = _export(Sequence([Media("a", repeat_count=2), Media("b")]), FLAT_LIST)
        assert _flat_locators(sink.calls) == ["a", "a", "b"]

    def test_nested_unrolling_multiplies(self):
        tree = Sequence([Sequence([Media("a"), Sequence([Media("b")], repeat_count=2)], repeat_count=2)])
        sink = _export(tree, FLAT_LIST)
        assert _flat_locators(sink.calls) == ["a", "b", "b", "a", "b", "b"]

    def test_unrolled_calls_have_repeat_one(self):
        sink = _export(Sequence([Media("a")], repeat_count=2), FLAT_LIST)
        assert all(call[1] == 1 for call in sink.calls if call[0] == "seq")

    def test_native_repeat(self):
        sink = _export(Sequence([Sequence([Media("a")], repeat_count=3)]), FULL)
        assert sink.calls == [("seq", 1, [("seq", 3, [("media", "a", 1)])])]

    def test_unrolled_where_sink_refuses_repeat(self):
        sink = RecordingSink(accepts_repeat=False)
        _export(Sequence([Media("a")], repeat_count=2), FULL, sink)
        assert _flat_locators(sink.calls) == ["a", "a"]

    def test_infinite_rejected_without_support(self):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            _export(Sequence([Sequence([Media("a")], repeat_count=-1)]), FLAT_LIST)
        assert exc_info.value.construct == "infinite repeat"

    def test_infinite_rejected_where_unrolling_is_needed(self):
        capabilities = Capabilities(
            supports_parallel=False,
            supports_infinite_repeat=True,
            supports_nested_repeat=False,
            supports_media_duration=False,
        )
        with pytest.raises(UnsupportedConstructError, match="infinite repeat"):
            _export(Sequence([Media("a", repeat_count=-1)]), capabilities)

    def test_infinite_native(self):
        sink = _export(Sequence([Media("a", repeat_count=-1)]), FULL)
        assert sink.calls == [("seq", 1, [("media", "a", -1)])]


class TestMedia:
    """Media-level rules."""

    def test_timed_media_rejected(self):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            _export(Sequence([Media("a", duration_ms=1000)]), FLAT_LIST, RecordingSink())
        assert exc_info.value.construct == "timed media"

    def test_timed_media_native(self):
        sink = _export(Sequence([Media("a", duration_ms=1000)]), FULL)
        assert _flat_locators(sink.calls) == ["a"]

    @pytest.mark.parametrize("capabilities", [FLAT_LIST, FULL])
    def test_empty_locator_dropped_silently(self, capabilities):
        tree = Sequence([Media(""), Media("b"), Sequence([Media("", duration_ms=5)], repeat_count=2)])
        sink = _export(tree, capabilities)
        assert _flat_locators(sink.calls) == ["b"]

    def test_zero_repeat_contributes_nothing(self):
        sink = RecordingSink()
        lower(Sequence([Media("a")], repeat_count=0), FLAT_LIST, sink)
        assert sink.calls == []

    def test_error_names_dialect(self):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            lower(Media("a", duration_ms=1), FLAT_LIST, RecordingSink(), dialect="wpl")
        assert exc_info.value.dialect == "wpl"
        assert "wpl" in str(exc_info.value)
        assert "timed media" in str(exc_info.value)
