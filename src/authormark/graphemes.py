"""Grapheme-cluster coordinates over text.

All annotation ranges are expressed in user-perceived characters
(extended grapheme clusters), never in code points, so a range can never
split a base letter from its combining marks, a flag pair, or an emoji
modifier sequence. Segmentation is locale-neutral (Unicode UAX #29) and is
provided by the ``regex`` module's ``\\X`` matcher.
"""
from __future__ import annotations

import bisect
from dataclasses import dataclass

import regex

_GRAPHEME_RE = regex.compile(r"\X")


@dataclass(frozen=True, slots=True)
class GraphemeIndex:
    """Cluster boundaries for one text.

    ``boundaries`` holds the code-point offset where each cluster starts,
    followed by ``len(text)`` as a final sentinel, so cluster ``i`` spans
    ``text[boundaries[i]:boundaries[i + 1]]``.
    """

    text: str
    boundaries: tuple[int, ...]

    @classmethod
    def build(cls, text: str | None) -> GraphemeIndex:
        src = text or ""
        starts = [m.start() for m in _GRAPHEME_RE.finditer(src)]
        starts.append(len(src))
        return cls(text=src, boundaries=tuple(starts))

    def count(self) -> int:
        return len(self.boundaries) - 1

    def extract(self, start: int, length: int) -> str:
        """Return clusters ``[start, start + length)``, clamped to the text."""
        total = self.count()
        start = max(0, start)
        if length <= 0 or start >= total:
            return ""
        stop = min(total, start + length)
        return self.text[self.boundaries[start]:self.boundaries[stop]]

    def char_offset(self, position: int) -> int:
        """Code-point offset where grapheme ``position`` starts (clamped)."""
        position = min(max(0, position), self.count())
        return self.boundaries[position]

    def grapheme_position(self, char_offset: int) -> int:
        """Grapheme position of the cluster containing ``char_offset``.

        Offsets at or past the end of the text map to ``count()``.
        """
        if char_offset >= len(self.text):
            return self.count()
        if char_offset <= 0:
            return 0
        return bisect.bisect_right(self.boundaries, char_offset) - 1

    def clusters(self) -> list[str]:
        return [
            self.text[self.boundaries[i]:self.boundaries[i + 1]]
            for i in range(self.count())
        ]


def count_graphemes(text: str | None) -> int:
    """Number of grapheme clusters in ``text`` (0 for empty or None)."""
    if not text:
        return 0
    return sum(1 for _ in _GRAPHEME_RE.finditer(text))


def extract_graphemes(text: str | None, start: int, length: int) -> str:
    """Substring spanning grapheme positions ``[start, start + length)``.

    Never fails on an over-long range: the result is truncated at the end
    of the text, and a start past the end yields "".
    """
    return GraphemeIndex.build(text).extract(start, length)


def split_graphemes(text: str | None) -> list[str]:
    if not text:
        return []
    return _GRAPHEME_RE.findall(text)
