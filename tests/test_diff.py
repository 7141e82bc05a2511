"""Tests for authormark.diff grapheme-level edit tracking."""
from __future__ import annotations

from authormark.diff import calculate_new_ranges, shift_ranges
from authormark.types import Range


class TestCalculateNewRanges:
    def test_append(self) -> None:
        assert calculate_new_ranges("Hello", "Hello world") == [Range(5, 6)]

    def test_unchanged_or_shortened(self) -> None:
        assert calculate_new_ranges("Hello", "Hello") == []
        assert calculate_new_ranges("Hello world", "Hello") == []

    def test_insertion_in_middle(self) -> None:
        assert calculate_new_ranges("abc", "abXc") == [Range(2, 1)]

    def test_from_empty(self) -> None:
        assert calculate_new_ranges("", "new text") == [Range(0, 8)]

    def test_counts_graphemes_not_code_points(self) -> None:
        old = "e\u0301"
        new = "e\u0301\U0001F1EF\U0001F1F5"
        assert calculate_new_ranges(old, new) == [Range(1, 1)]


class TestShiftRanges:
    def test_insertion_before_range(self) -> None:
        assert shift_ranges([Range(0, 3)], "abc", "Xabc") == [Range(1, 3)]

    def test_deletion_inside_range(self) -> None:
        assert shift_ranges([Range(0, 6)], "abcdef", "abef") == [Range(0, 4)]

    def test_range_entirely_deleted(self) -> None:
        assert shift_ranges([Range(2, 2)], "abcdef", "abef") == []

    def test_invalid_ranges_ignored(self) -> None:
        assert shift_ranges([Range(-1, 2)], "abc", "abc") == []
        assert shift_ranges([], "abc", "abcd") == []
