"""Apply authorship annotations after an editing tool touched a file.

This is the orchestration layer around the codec: it decides which ranges
an edit produced and rewrites the document. File access is confined to
`annotate_file`; everything else is a pure function of its arguments.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from authormark.codec import add_author_ranges, parse_document, serialize_document
from authormark.config import AnnotatorConfig
from authormark.diff import calculate_new_ranges, shift_ranges
from authormark.graphemes import count_graphemes
from authormark.io_utils import read_document, write_document
from authormark.types import AnnotationSet, Range

SUPPORTED_TOOLS: tuple[str, ...] = ("Write", "Edit")


@dataclass(frozen=True, slots=True)
class AnnotationOutcome:
    path: Path
    changed: bool
    reason: str  # annotated | unchanged | skipped | unsupported_extension | missing_file


def should_annotate(path: Path, config: AnnotatorConfig) -> bool:
    return path.suffix.lower() in config.extensions


def _previous_body(body: str, tool_input: dict[str, Any]) -> str | None:
    """Undo an Edit on ``body`` to recover the text before it.

    Returns None when the edit cannot be located, e.g. a pure deletion or a
    replacement string that no longer appears in the body.
    """
    old = tool_input.get("old_string")
    new = tool_input.get("new_string")
    if not isinstance(old, str) or not isinstance(new, str) or not new:
        return None
    if new not in body:
        return None
    if tool_input.get("replace_all"):
        return body.replace(new, old)
    return body.replace(new, old, 1)


def _shift_authors(annotations: AnnotationSet, old_body: str, new_body: str) -> AnnotationSet:
    return AnnotationSet(
        authors={
            key: tuple(shift_ranges(ranges, old_body, new_body))
            for key, ranges in annotations.authors.items()
        },
    )


def annotate_content(
    content: str,
    config: AnnotatorConfig,
    *,
    tool_name: str,
    tool_input: dict[str, Any] | None = None,
) -> str | None:
    """Return ``content`` with the configured author credited, or None.

    ``Write`` credits the whole body. ``Edit`` credits the whole body when
    nobody is annotated yet; otherwise it credits only the clusters the edit
    introduced and shifts everyone else's ranges to match. None means there
    is nothing to write: an unsupported tool, an edit that cannot be
    reconstructed, or a document that would not change.
    """
    if tool_name not in SUPPORTED_TOOLS:
        return None

    parsed = parse_document(content)
    body = parsed.body
    annotations = parsed.annotations
    new_ranges: list[Range]

    if tool_name == "Write" or annotations.is_empty:
        new_ranges = [Range(0, count_graphemes(body))]
    else:
        previous = _previous_body(body, tool_input or {})
        if previous is None:
            return None
        annotations = _shift_authors(annotations, previous, body)
        new_ranges = calculate_new_ranges(previous, body)

    updated = add_author_ranges(
        annotations, config.author_name, new_ranges, config.author_kind,
    )
    result = serialize_document(body, updated)
    return None if result == content else result


def annotate_file(
    path: Path,
    config: AnnotatorConfig,
    *,
    tool_name: str,
    tool_input: dict[str, Any] | None = None,
) -> AnnotationOutcome:
    """Annotate ``path`` in place."""
    if not should_annotate(path, config):
        return AnnotationOutcome(path, False, "unsupported_extension")
    if not path.is_file():
        return AnnotationOutcome(path, False, "missing_file")

    if tool_name not in SUPPORTED_TOOLS:
        return AnnotationOutcome(path, False, "skipped")
    content = read_document(path)
    result = annotate_content(
        content, config, tool_name=tool_name, tool_input=tool_input,
    )
    if result is None:
        return AnnotationOutcome(path, False, "unchanged")
    write_document(path, result)
    return AnnotationOutcome(path, True, "annotated")
