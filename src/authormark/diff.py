"""Grapheme-level diffing for incremental edits.

Compares two versions of a body text cluster by cluster so that an edit
can be attributed to its author without claiming the untouched text, and
so that existing ranges follow the text they annotate.
"""
from __future__ import annotations

from collections.abc import Iterable
from difflib import SequenceMatcher
from typing import TypeAlias

from authormark.graphemes import split_graphemes
from authormark.ranges import merge_ranges
from authormark.types import Range

Opcode: TypeAlias = tuple[str, int, int, int, int]


def grapheme_opcodes(old_text: str, new_text: str) -> list[Opcode]:
    """`difflib` opcodes over the grapheme clusters of both texts."""
    matcher = SequenceMatcher(
        None, split_graphemes(old_text), split_graphemes(new_text), autojunk=False,
    )
    return matcher.get_opcodes()


def calculate_new_ranges(old_text: str, new_text: str) -> list[Range]:
    """Ranges of ``new_text`` that were inserted or replaced.

    An append yields the single tail range; an unchanged or purely
    shortened text yields [].
    """
    inserted = [
        Range(j1, j2 - j1)
        for tag, _i1, _i2, j1, j2 in grapheme_opcodes(old_text, new_text)
        if tag in ("insert", "replace")
    ]
    return merge_ranges(inserted)


def shift_ranges(
    ranges: Iterable[Range],
    old_text: str,
    new_text: str,
) -> list[Range]:
    """Re-map ranges from ``old_text`` coordinates onto ``new_text``.

    Only the parts of a range that survive unchanged are kept; deleted or
    replaced clusters drop out.
    """
    valid = [r for r in ranges if r.is_valid and r.length > 0]
    if not valid:
        return []
    shifted: list[Range] = []
    for tag, i1, i2, j1, _j2 in grapheme_opcodes(old_text, new_text):
        if tag != "equal":
            continue
        for r in valid:
            lo = max(int(r.start), i1)
            hi = min(int(r.end), i2)
            if lo < hi:
                shifted.append(Range(j1 + (lo - i1), hi - lo))
    return merge_ranges(shifted)
