"""Annotation footer codec: parse, extend, finalize, serialize and verify.

Wire format trailing the body text::

    <body>

    ---
    Annotations: 0,11 SHA-256 <hex digest>
    &Claude: 0,11
    ...

Parsing is permissive: a line that cannot be read is skipped and a
malformed range survives as an invalid `Range`, so a hand-edited footer
never costs the body text. Integrity problems are reported by
`verify_annotations` as data, not raised.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

from authormark.digest import compute_digest, digest_matches
from authormark.graphemes import GraphemeIndex
from authormark.ranges import format_ranges, merge_ranges, parse_range_token, parse_ranges
from authormark.types import (
    HASH_ALGORITHM,
    MAX_DIGEST_LENGTH,
    AnnotationSet,
    AnnotationsRecord,
    AuthorKind,
    Digest,
    ParsedDocument,
    Range,
    VerificationResult,
)

RECORD_KEY = "Annotations"
END_MARKER = "..."
DELIMITER = "\n\n---\n"
HUMAN_KIND = "Human"
HUMAN_SIGIL = "@"
OTHER_SIGIL = "&"

ERROR_MISSING_HASH = "Missing hash in Annotations line"
ERROR_HASH_MISMATCH = "Hash verification failed"

# newline, optional blank line, a line of "---", then the record line;
# lines may end in CRLF
_FOOTER_RE = re.compile(r"\n(?:[ \t]*\r?\n)?---[ \t\r]*\n(?=Annotations:)")
# a colon preceded by an even number of backslashes
_UNESCAPED_COLON_RE = re.compile(r"(?<!\\)(?:\\\\)*:")
_ESCAPE_RE = re.compile(r"\\([\\:])")


# ---------------------------------------------------------------------------
# Author keys
# ---------------------------------------------------------------------------


def author_key(author: str, kind: str = "Other") -> str:
    """Build the wire key for ``author``.

    The sigil is chosen by ``kind`` alone: ``@`` for "Human", ``&`` for
    anything else. A sigil already present on ``author`` is discarded.
    """
    name = author.strip().lstrip(HUMAN_SIGIL + OTHER_SIGIL)
    if not name:
        raise ValueError(f"author name cannot be empty, got {author!r}")
    sigil = HUMAN_SIGIL if kind == HUMAN_KIND else OTHER_SIGIL
    return f"{sigil}{name}"


def split_author_key(key: str) -> tuple[AuthorKind | None, str]:
    """Return ``(kind, name)``; kind is None for keys without a sigil."""
    if key.startswith(HUMAN_SIGIL):
        return HUMAN_KIND, key[1:]
    if key.startswith(OTHER_SIGIL):
        return "Other", key[1:]
    return None, key


def _escape_key(key: str) -> str:
    return key.replace("\\", "\\\\").replace(":", "\\:")


def _unescape_key(key: str) -> str:
    return _ESCAPE_RE.sub(r"\1", key)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_document(content: str | None) -> ParsedDocument:
    """Split ``content`` into body text and annotation set.

    The footer is the last ``---`` delimiter followed by an ``Annotations:``
    line. Without one, the whole document is body and the set is empty.
    """
    src = content or ""
    last: re.Match[str] | None = None
    for match in _FOOTER_RE.finditer(src):
        last = match
    if last is None:
        return ParsedDocument(body=src, annotations=AnnotationSet(), raw_footer=None)

    block = src[last.end():]
    return ParsedDocument(
        body=src[:last.start()],
        annotations=parse_footer(block),
        raw_footer=block,
    )


def parse_footer(block: str) -> AnnotationSet:
    """Parse footer lines into an `AnnotationSet`. Never raises."""
    authors: dict[str, tuple[Range, ...]] = {}
    record: AnnotationsRecord | None = None

    for line in block.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped == END_MARKER:
            break
        colon = _UNESCAPED_COLON_RE.search(stripped)
        if colon is None:
            continue
        key = _unescape_key(stripped[:colon.end() - 1].strip())
        value = stripped[colon.end():].strip()
        if not key:
            continue
        if key == RECORD_KEY:
            record = _parse_record(value)
        else:
            authors[key] = authors.get(key, ()) + tuple(parse_ranges(value))

    return AnnotationSet(authors=authors, record=record)


def _parse_record(value: str) -> AnnotationsRecord:
    tokens = value.split()
    ranges: list[Range] = []
    digest: Digest | None = None
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == HASH_ALGORITHM and i + 1 < len(tokens):
            digest = Digest(value=tokens[i + 1], algorithm=HASH_ALGORITHM)
            i += 2
            continue
        if "," in token:
            ranges.append(parse_range_token(token))
        i += 1
    return AnnotationsRecord(ranges=tuple(ranges), digest=digest)


# ---------------------------------------------------------------------------
# Mutation and serialization
# ---------------------------------------------------------------------------


def add_author_ranges(
    annotations: AnnotationSet,
    author: str,
    ranges: Iterable[Range],
    kind: str = "Other",
) -> AnnotationSet:
    """Merge ``ranges`` into the author's existing ranges.

    Returns a new set; other authors are untouched and nothing is ever
    shrunk. The Annotations Record is dropped because it no longer matches
    the authors; `finalize` rebuilds it.
    """
    key = author_key(author, kind)
    authors = dict(annotations.authors)
    authors[key] = tuple(merge_ranges([*authors.get(key, ()), *ranges]))
    return AnnotationSet(authors=authors, record=None)


def union_ranges(annotations: AnnotationSet) -> list[Range]:
    """Merged union of every author's ranges."""
    return merge_ranges(r for ranges in annotations.authors.values() for r in ranges)


def annotated_text(body: str, ranges: Sequence[Range]) -> str:
    """Concatenate the clusters addressed by ``ranges`` with no separators.

    Invalid ranges contribute nothing.
    """
    index = GraphemeIndex.build(body)
    return "".join(
        index.extract(int(r.start), int(r.length)) for r in ranges if r.is_valid
    )


def finalize(
    body: str,
    annotations: AnnotationSet,
    *,
    digest_length: int = MAX_DIGEST_LENGTH,
) -> AnnotationSet:
    """Recompute the Annotations Record from the author entries."""
    union = union_ranges(annotations)
    digest = compute_digest(annotated_text(body, union), digest_length)
    return AnnotationSet(
        authors=dict(annotations.authors),
        record=AnnotationsRecord(ranges=tuple(union), digest=Digest(value=digest)),
    )


def render_footer(annotations: AnnotationSet) -> str:
    """Render a finalized set as footer lines, terminated by ``...``."""
    record = annotations.record
    if record is None or record.digest is None:
        raise ValueError("annotation set must be finalized before rendering")
    record_ranges = format_ranges(record.ranges)
    lines = [
        f"{RECORD_KEY}: {record_ranges} {record.digest.algorithm} {record.digest.value}"
        if record_ranges
        else f"{RECORD_KEY}: {record.digest.algorithm} {record.digest.value}",
    ]
    for key, ranges in annotations.authors.items():
        formatted = format_ranges(merge_ranges(ranges))
        if formatted:
            lines.append(f"{_escape_key(key)}: {formatted}")
    lines.append(END_MARKER)
    return "\n".join(lines)


def serialize_document(
    body: str,
    annotations: AnnotationSet,
    *,
    digest_length: int = MAX_DIGEST_LENGTH,
) -> str:
    """Return ``body`` plus a freshly computed footer.

    A set with no author ranges yields ``body`` unchanged; an empty footer
    is never written.
    """
    if not union_ranges(annotations):
        return body
    finalized = finalize(body, annotations, digest_length=digest_length)
    return f"{body}{DELIMITER}{render_footer(finalized)}"


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


def verify_annotations(body: str, annotations: AnnotationSet) -> VerificationResult:
    """Check the stored record's digest against the body text.

    Uses the record's own ranges, not the author entries, so this checks
    the document's internal consistency.
    """
    record = annotations.record
    if record is None:
        return VerificationResult(valid=True)
    if record.digest is None or not record.digest.value:
        return VerificationResult(valid=False, error=ERROR_MISSING_HASH)
    if digest_matches(annotated_text(body, record.ranges), record.digest.value):
        return VerificationResult(valid=True)
    return VerificationResult(valid=False, error=ERROR_HASH_MISMATCH)


def verify_document(content: str | None) -> VerificationResult:
    parsed = parse_document(content)
    return verify_annotations(parsed.body, parsed.annotations)


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def _ranges_to_list(ranges: Iterable[Range]) -> list[dict[str, Any]]:
    return [{"start": r.start, "length": r.length} for r in ranges]


def annotation_set_to_dict(annotations: AnnotationSet) -> dict[str, Any]:
    """JSON-ready view of an annotation set."""
    record: dict[str, Any] | None = None
    if annotations.record is not None:
        digest = annotations.record.digest
        record = {
            "ranges": _ranges_to_list(annotations.record.ranges),
            "hash": (
                {"algorithm": digest.algorithm, "value": digest.value}
                if digest is not None
                else None
            ),
        }
    return {
        "authors": {
            key: _ranges_to_list(ranges) for key, ranges in annotations.authors.items()
        },
        "record": record,
    }


def verification_to_dict(result: VerificationResult) -> dict[str, Any]:
    return {"valid": result.valid, "error": result.error}
