"""Tests for authormark.graphemes."""
from __future__ import annotations

from authormark.graphemes import (
    GraphemeIndex,
    count_graphemes,
    extract_graphemes,
    split_graphemes,
)

COMBINING = "a\u0301"  # a + combining acute accent
FLAGS = "\U0001F1EF\U0001F1F5\U0001F1FA\U0001F1F8"  # JP, US
THUMBS_UP_TONE = "\U0001F44D\U0001F3FD"


def test_combining_mark_is_one_cluster() -> None:
    assert count_graphemes(COMBINING) == 1
    assert extract_graphemes(COMBINING, 0, 1) == COMBINING


def test_flag_pairs_and_modifiers() -> None:
    assert count_graphemes(FLAGS) == 2
    assert extract_graphemes(FLAGS, 1, 1) == "\U0001F1FA\U0001F1F8"
    assert count_graphemes(THUMBS_UP_TONE) == 1


def test_empty_and_none() -> None:
    assert count_graphemes("") == 0
    assert count_graphemes(None) == 0
    assert extract_graphemes(None, 0, 3) == ""
    assert split_graphemes("") == []


def test_japanese_text() -> None:
    text = "こんにちは、世界！"
    assert count_graphemes(text) == 9
    assert extract_graphemes(text, 6, 2) == "世界"


def test_extract_clamps_over_long_range() -> None:
    assert extract_graphemes("abc", 1, 10) == "bc"
    assert extract_graphemes("abc", 3, 1) == ""
    assert extract_graphemes("abc", 10, 1) == ""
    assert extract_graphemes("abc", 0, 0) == ""


def test_extract_preserves_clusters_mid_text() -> None:
    text = f"x{COMBINING}y{FLAGS}"
    assert count_graphemes(text) == 5
    assert extract_graphemes(text, 1, 2) == f"{COMBINING}y"
    assert extract_graphemes(text, 3, 5) == FLAGS


class TestGraphemeIndex:
    def test_boundaries(self) -> None:
        index = GraphemeIndex.build("e\u0301x")
        assert index.boundaries == (0, 2, 3)
        assert index.count() == 2
        assert index.clusters() == ["e\u0301", "x"]

    def test_char_offset(self) -> None:
        index = GraphemeIndex.build("e\u0301x")
        assert index.char_offset(0) == 0
        assert index.char_offset(1) == 2
        assert index.char_offset(2) == 3
        assert index.char_offset(9) == 3

    def test_grapheme_position_inside_cluster(self) -> None:
        index = GraphemeIndex.build("e\u0301x")
        assert index.grapheme_position(0) == 0
        assert index.grapheme_position(1) == 0
        assert index.grapheme_position(2) == 1
        assert index.grapheme_position(3) == 2

    def test_empty_text(self) -> None:
        index = GraphemeIndex.build("")
        assert index.count() == 0
        assert index.extract(0, 5) == ""
