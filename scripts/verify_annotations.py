#!/usr/bin/env python3
"""Verify the authorship footer of one or more documents.

Prints a JSON summary to stdout; exit status 1 when any document fails.

Usage:
    python3 scripts/verify_annotations.py notes.md chapter-1.md [--json]
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from authormark.codec import (
    annotation_set_to_dict,
    parse_document,
    verify_annotations,
)
from authormark.graphemes import count_graphemes
from authormark.io_utils import dump_json, read_document


def verify_path(path: Path) -> dict[str, Any]:
    """Verification row for one file."""
    if not path.is_file():
        return {"path": str(path), "valid": False, "error": "missing_file"}
    parsed = parse_document(read_document(path))
    result = verify_annotations(parsed.body, parsed.annotations)
    return {
        "path": str(path),
        "valid": result.valid,
        "error": result.error,
        "has_footer": parsed.raw_footer is not None,
        "body_graphemes": count_graphemes(parsed.body),
        "annotations": annotation_set_to_dict(parsed.annotations),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Verify document annotation footers")
    parser.add_argument("paths", nargs="+", type=Path)
    parser.add_argument("--json", action="store_true", help="Emit full per-file detail")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    rows = [verify_path(p) for p in args.paths]
    failures = [r for r in rows if not r["valid"]]

    payload: dict[str, Any] = {
        "status": "pass" if not failures else "fail",
        "ok": not failures,
        "checked_files": len(rows),
    }
    if args.json:
        payload["results"] = rows
    else:
        payload["failures"] = [
            {"path": r["path"], "error": r["error"]} for r in failures
        ]
    dump_json(payload)
    return 0 if not failures else 1


if __name__ == "__main__":
    raise SystemExit(main())
