"""Annotator configuration loaded from a plugin manifest."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from authormark.io_utils import load_json

PLUGIN_MANIFEST = "plugin.json"
DEFAULT_AUTHOR_NAME = "Claude"
DEFAULT_AUTHOR_KIND = "Other"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".txt", ".text")


@dataclass(frozen=True, slots=True)
class AnnotatorConfig:
    """Who gets credited for edits, and which files are annotated."""

    author_name: str = DEFAULT_AUTHOR_NAME
    author_kind: str = DEFAULT_AUTHOR_KIND
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> AnnotatorConfig:
        """Build from the ``config`` object of a plugin manifest.

        Missing or blank fields fall back to defaults.
        """
        name = str(payload.get("authorName") or "").strip() or DEFAULT_AUTHOR_NAME
        kind = str(payload.get("authorKind") or "").strip() or DEFAULT_AUTHOR_KIND
        raw_exts = payload.get("extensions")
        extensions = DEFAULT_EXTENSIONS
        if isinstance(raw_exts, list) and raw_exts:
            extensions = tuple(_normalize_extension(str(e)) for e in raw_exts if str(e).strip())
        return cls(author_name=name, author_kind=kind, extensions=extensions)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip().lower()
    return ext if ext.startswith(".") else f".{ext}"


def load_config(plugin_root: Path | None) -> AnnotatorConfig:
    """Read ``<plugin_root>/plugin.json``; defaults when absent or unreadable."""
    path = (plugin_root or Path(".")) / PLUGIN_MANIFEST
    try:
        manifest = load_json(path)
    except (OSError, orjson.JSONDecodeError):
        return AnnotatorConfig()
    if not isinstance(manifest, dict):
        return AnnotatorConfig()
    section = manifest.get("config")
    if not isinstance(section, dict):
        return AnnotatorConfig()
    return AnnotatorConfig.from_dict(section)
