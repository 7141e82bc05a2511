"""Range algebra: merging and the compact ``start,length`` wire syntax.

Pure operations with zero text dependencies; ranges are in grapheme units.
"""
from __future__ import annotations

import math
import re
from collections.abc import Iterable

from authormark.types import Range, RangeValue

_INT_RE = re.compile(r"[+-]?[0-9]+")


def merge_ranges(ranges: Iterable[Range]) -> list[Range]:
    """Sort by start and fold overlapping or touching ranges together.

    A candidate joins the running range when ``candidate.start <= last.end``,
    so ``[0,5]`` and ``[5,3]`` become ``[0,8]`` while ``[0,5]`` and ``[6,3]``
    stay apart. Invalid and zero-length ranges contribute nothing and are
    dropped. The result is ascending and non-overlapping.
    """
    candidates = sorted(
        (r for r in ranges if r.is_valid and r.length > 0),
        key=lambda r: (r.start, r.length),
    )
    merged: list[Range] = []
    for current in candidates:
        if merged and current.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Range(last.start, max(last.end, current.end) - last.start)
        else:
            merged.append(current)
    return merged


def format_ranges(ranges: Iterable[Range]) -> str:
    """Render ranges as space-separated ``start,length`` pairs, in order."""
    return " ".join(f"{_format_value(r.start)},{_format_value(r.length)}" for r in ranges)


def parse_ranges(value: str | None) -> list[Range]:
    """Inverse of `format_ranges`. Never raises.

    Each whitespace-separated token is split on commas; a field that is not
    an integer (or is missing) becomes NaN so that the range reports
    ``is_valid == False`` and is rejected downstream instead of here.
    """
    if not value or not value.strip():
        return []
    return [parse_range_token(token) for token in value.split()]


def parse_range_token(token: str) -> Range:
    parts = token.split(",")
    start = _parse_value(parts[0])
    length = _parse_value(parts[1]) if len(parts) > 1 else math.nan
    return Range(start, length)


def _parse_value(raw: str) -> RangeValue:
    if _INT_RE.fullmatch(raw):
        return int(raw)
    return math.nan


def _format_value(value: RangeValue) -> str:
    if isinstance(value, float) and math.isnan(value):
        return "NaN"
    return str(value)
