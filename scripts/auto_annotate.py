#!/usr/bin/env python3
"""PostToolUse hook: credit the configured author for Write/Edit changes.

Reads the hook payload (JSON) from stdin, annotates the touched file in
place, and always exits 0 so a failed annotation never blocks the editing
workflow. Diagnostics go to stderr and, optionally, a log file.

Usage::

    echo '{"tool_name": "Write", "tool_input": {"file_path": "notes.md"}}' \
      | python3 scripts/auto_annotate.py [--plugin-root DIR] [--verbose]
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from authormark.annotate import SUPPORTED_TOOLS, AnnotationOutcome, annotate_file
from authormark.codec import author_key
from authormark.config import AnnotatorConfig, load_config
from authormark.io_utils import loads_json

log = logging.getLogger("auto_annotate")


def extract_tool_call(payload: dict[str, Any]) -> tuple[str | None, dict[str, Any]]:
    """Return ``(tool_name, tool_input)`` from either payload layout."""
    tool = payload.get("tool")
    tool = tool if isinstance(tool, dict) else {}
    name = payload.get("tool_name") or tool.get("name")
    tool_input = payload.get("tool_input") or tool.get("input")
    return (
        str(name) if name else None,
        tool_input if isinstance(tool_input, dict) else {},
    )


def resolve_target(tool_input: dict[str, Any], *, cwd: Path) -> Path | None:
    raw = tool_input.get("file_path")
    if not isinstance(raw, str) or not raw.strip():
        return None
    path = Path(raw)
    return path if path.is_absolute() else (cwd / path).resolve()


def run_hook(
    payload: dict[str, Any],
    config: AnnotatorConfig,
    *,
    cwd: Path,
) -> AnnotationOutcome | None:
    """Annotate the file named by a hook payload; None when not applicable."""
    tool_name, tool_input = extract_tool_call(payload)
    if tool_name not in SUPPORTED_TOOLS:
        log.debug("Ignoring tool %r", tool_name)
        return None

    path = resolve_target(tool_input, cwd=cwd)
    if path is None:
        log.warning("No file path found in tool input")
        return None

    outcome = annotate_file(path, config, tool_name=tool_name, tool_input=tool_input)
    if outcome.changed:
        log.info(
            "Added %s annotations to %s",
            author_key(config.author_name, config.author_kind),
            path,
        )
    elif outcome.reason == "missing_file":
        log.warning("File not found: %s", path)
    else:
        log.debug("No annotation written for %s (%s)", path, outcome.reason)
    return outcome


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Annotate files touched by Write/Edit tool calls.",
    )
    parser.add_argument(
        "--plugin-root",
        type=Path,
        default=None,
        help="Directory holding plugin.json (default: $CLAUDE_PLUGIN_ROOT or .)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append log records to this file",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _configure_logging(*, verbose: bool, log_file: Path | None) -> None:
    """Log to stderr, plus ``log_file`` when it can be opened."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_file_error: OSError | None = None
    if log_file is not None:
        try:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        except OSError as exc:
            log_file_error = exc
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        handlers=handlers,
        force=True,
    )
    if log_file_error is not None:
        log.warning("Cannot open log file %s: %s", log_file, log_file_error)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(verbose=args.verbose, log_file=args.log_file)

    plugin_root = args.plugin_root
    if plugin_root is None:
        plugin_root = Path(os.environ.get("CLAUDE_PLUGIN_ROOT", "."))
    config = load_config(plugin_root)

    try:
        raw = sys.stdin.read()
        log.debug("Hook input: %s", raw)
        payload = loads_json(raw) if raw.strip() else {}
        if not isinstance(payload, dict):
            log.error("Hook input is not a JSON object")
            return 0
        run_hook(payload, config, cwd=Path.cwd())
    except Exception:
        log.exception("Error in auto-annotate hook")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
