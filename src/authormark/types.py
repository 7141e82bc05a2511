"""Core types for authorship annotations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias


AuthorKind: TypeAlias = Literal["Human", "Other"]
RangeValue: TypeAlias = int | float  # float only for NaN placeholders from malformed tokens

HASH_ALGORITHM = "SHA-256"
MIN_DIGEST_LENGTH = 32
MAX_DIGEST_LENGTH = 64


@dataclass(frozen=True, slots=True)
class Range:
    """Span of grapheme clusters measured from the start of the body text."""

    start: RangeValue
    length: RangeValue

    @property
    def end(self) -> RangeValue:
        return self.start + self.length

    @property
    def is_valid(self) -> bool:
        """True when both fields are non-negative integers."""
        return all(isinstance(v, int) and v >= 0 for v in (self.start, self.length))


@dataclass(frozen=True, slots=True)
class Digest:
    """Integrity digest as stored on the Annotations line."""

    value: str
    algorithm: str = HASH_ALGORITHM

    @property
    def truncation_length(self) -> int:
        return len(self.value)


@dataclass(frozen=True, slots=True)
class AnnotationsRecord:
    """Union of all author ranges plus the digest binding them to the text.

    Derived from the author entries; `finalize` rebuilds it whenever an
    author's ranges change.
    """

    ranges: tuple[Range, ...]
    digest: Digest | None = None


@dataclass(frozen=True, slots=True)
class AnnotationSet:
    """Author key -> ranges, plus the optional Annotations Record."""

    authors: dict[str, tuple[Range, ...]] = field(default_factory=dict)
    record: AnnotationsRecord | None = None

    @property
    def is_empty(self) -> bool:
        return not any(self.authors.values())


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Result of splitting a document into body text and its footer."""

    body: str
    annotations: AnnotationSet
    raw_footer: str | None = None


@dataclass(frozen=True, slots=True)
class VerificationResult:
    valid: bool
    error: str | None = None
