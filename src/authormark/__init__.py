"""Authorship annotations for plain-text and Markdown documents."""

from authormark.codec import (
    add_author_ranges,
    annotated_text,
    annotation_set_to_dict,
    author_key,
    finalize,
    parse_document,
    parse_footer,
    serialize_document,
    split_author_key,
    union_ranges,
    verification_to_dict,
    verify_annotations,
    verify_document,
)
from authormark.diff import calculate_new_ranges, shift_ranges
from authormark.digest import compute_digest, digest_matches
from authormark.graphemes import (
    GraphemeIndex,
    count_graphemes,
    extract_graphemes,
    split_graphemes,
)
from authormark.ranges import format_ranges, merge_ranges, parse_ranges
from authormark.types import (
    AnnotationSet,
    AnnotationsRecord,
    AuthorKind,
    Digest,
    ParsedDocument,
    Range,
    VerificationResult,
)

__all__ = [
    "AnnotationSet",
    "AnnotationsRecord",
    "AuthorKind",
    "Digest",
    "GraphemeIndex",
    "ParsedDocument",
    "Range",
    "VerificationResult",
    "add_author_ranges",
    "annotated_text",
    "annotation_set_to_dict",
    "author_key",
    "calculate_new_ranges",
    "compute_digest",
    "count_graphemes",
    "digest_matches",
    "extract_graphemes",
    "finalize",
    "format_ranges",
    "merge_ranges",
    "parse_document",
    "parse_footer",
    "parse_ranges",
    "serialize_document",
    "shift_ranges",
    "split_author_key",
    "split_graphemes",
    "union_ranges",
    "verification_to_dict",
    "verify_annotations",
    "verify_document",
]
