"""Unit tests for the IR tree, its helpers and the normalizer.

WHY: Every dialect pair converts through this tree. Invalid repeat
counts must be refused at construction, dispatch tables must be
complete, and normalization must never change what plays or in which
order.
"""

import copy

import pytest

from playlist_transcoder.core.ir import (
    ENTER,
    LEAVE,
    Media,
    NodeDispatch,
    Parallel,
    Sequence,
    iter_media,
    walk,
)
from playlist_transcoder.core.normalizer import normalize


class TestNodes:
    """Construction-time validation of IR nodes."""

    def test_defaults(self):
        media = Media("a.mp3")
        assert media.repeat_count == 1
        assert media.duration_ms is None
        assert Sequence().children == []

    @pytest.mark.parametrize("node_cls", [Sequence, Parallel])
    def test_container_rejects_invalid_repeat(self, node_cls):
        with pytest.raises(ValueError):
            node_cls(repeat_count=-2)

    def test_media_rejects_invalid_repeat(self):
        with pytest.raises(ValueError):
            Media("a.mp3", repeat_count=-5)

    def test_media_rejects_negative_duration(self):
        with pytest.raises(ValueError):
            Media("a.mp3", duration_ms=-1)

    def test_structural_equality(self):
        assert Sequence([Media("a")], 2) == Sequence([Media("a")], 2)
        assert Sequence([Media("a")]) != Parallel([Media("a")])


class TestNodeDispatch:
    """NodeDispatch refuses incomplete handler tables."""

    def test_dispatches_on_variant(self):
        dispatch = NodeDispatch({
            Sequence: lambda node, suffix: "seq" + suffix,
            Parallel: lambda node, suffix: "par" + suffix,
            Media: lambda node, suffix: node.locator + suffix,
        })
        assert dispatch(Sequence(), "!") == "seq!"
        assert dispatch(Parallel(), "?") == "par?"
        assert dispatch(Media("a"), ".") == "a."

    def test_missing_handler(self):
        with pytest.raises(TypeError, match="Parallel"):
            NodeDispatch({Sequence: len, Media: len})

    def test_unknown_handler_type(self):
        with pytest.raises(TypeError):
            NodeDispatch({Sequence: len, Parallel: len, Media: len, str: len})

    def test_rejects_non_node(self):
        dispatch = NodeDispatch({Sequence: len, Parallel: len, Media: len})
        with pytest.raises(TypeError):
            dispatch("not a node")


class TestWalk:
    """walk() yields enter/leave events in document order."""

    def test_event_order(self):
        a, b = Media("a"), Media("b")
        inner = Parallel([b])
        root = Sequence([a, inner])
        events = [(event, node) for event, node in walk(root)]
        assert events == [
            (ENTER, root),
            (ENTER, a),
            (LEAVE, a),
            (ENTER, inner),
            (ENTER, b),
            (LEAVE, b),
            (LEAVE, inner),
            (LEAVE, root),
        ]

    def test_iter_media(self, smil_sample_playlist):
        locators = [media.locator for media in iter_media(smil_sample_playlist)]
        assert locators == ["intro.mp4", "song.mp3", "slide.png", "a.mp3", "caption.txt"]

    def test_deep_tree(self):
        node = Media("leaf")
        for _ in range(5000):
            node = Sequence([node], repeat_count=2)
        assert [media.locator for media in iter_media(node)] == ["leaf"]


class TestNormalize:
    """Structural simplification before export."""

    def test_splices_plain_sequences(self):
        tree = Sequence([Media("a"), Sequence([Media("b"), Sequence([Media("c")])]), Media("d")])
        assert normalize(tree) == Sequence([Media("a"), Media("b"), Media("c"), Media("d")])

    def test_keeps_repeated_sequence(self):
        tree = Sequence([Sequence([Media("a")], repeat_count=2)])
        assert normalize(tree) == tree

    def test_removes_zero_repeat_and_empty_containers(self):
        tree = Sequence([
            Media("a", repeat_count=0),
            Sequence([]),
            Parallel([Sequence([Media("b", repeat_count=0)])]),
            Media("c"),
        ])
        assert normalize(tree) == Sequence([Media("c")])

    def test_never_collapses_parallel(self):
        tree = Sequence([Parallel([Media("a")])])
        assert normalize(tree) == Sequence([Parallel([Media("a")])])

    def test_sequence_inside_parallel_is_kept(self):
        tree = Parallel([Sequence([Media("a"), Media("b")]), Media("c")])
        assert normalize(tree) == tree

    def test_empty_root(self):
        assert normalize(Sequence([Media("a")], repeat_count=0)) == Sequence()
        assert normalize(Parallel([Sequence()])) == Sequence()

    def test_media_root(self):
        assert normalize(Media("a", duration_ms=10)) == Media("a", duration_ms=10)

    def test_idempotent(self, smil_sample_playlist, asx_sample_playlist):
        for tree in (smil_sample_playlist, asx_sample_playlist):
            once = normalize(tree)
            assert normalize(once) == once

    def test_does_not_mutate_input(self):
        tree = Sequence([Sequence([Media("a")]), Media("b", repeat_count=0)])
        snapshot = copy.deepcopy(tree)
        normalize(tree)
        assert tree == snapshot
