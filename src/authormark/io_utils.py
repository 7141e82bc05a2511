"""I/O utilities for JSON payloads and annotated documents.

JSON goes through orjson; documents are always read and written as UTF-8
with newlines preserved byte for byte, since annotation ranges depend on
the exact text.
"""
from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any

import orjson


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def loads_json(raw: str | bytes) -> Any:
    return orjson.loads(raw)


def dump_json(obj: Any, *, pretty: bool = True) -> None:
    """Write ``obj`` as JSON to stdout."""
    opts = orjson.OPT_INDENT_2 if pretty else 0
    sys.stdout.buffer.write(orjson.dumps(obj, option=opts))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()


def read_document(path: Path) -> str:
    """Read a document without newline translation."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: Path, content: str) -> None:
    """Atomically replace ``path`` with ``content`` (UTF-8, newlines kept)."""
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
