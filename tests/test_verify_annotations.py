"""Tests for scripts/verify_annotations.py."""
from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from authormark.codec import add_author_ranges, serialize_document
from authormark.types import AnnotationSet, Range
from scripts.verify_annotations import main, verify_path


def _write_annotated(path: Path, body: str) -> None:
    annotations = add_author_ranges(AnnotationSet(), "Claude", [Range(0, len(body))])
    path.write_text(serialize_document(body, annotations), encoding="utf-8")


def test_verify_path_valid(tmp_path: Path) -> None:
    path = tmp_path / "ok.md"
    _write_annotated(path, "Hello world")
    row = verify_path(path)
    assert row["valid"] is True
    assert row["error"] is None
    assert row["has_footer"] is True
    assert row["body_graphemes"] == 11


def test_verify_path_plain_file(tmp_path: Path) -> None:
    path = tmp_path / "plain.md"
    path.write_text("No footer here.", encoding="utf-8")
    row = verify_path(path)
    assert row["valid"] is True
    assert row["has_footer"] is False


def test_verify_path_missing(tmp_path: Path) -> None:
    row = verify_path(tmp_path / "gone.md")
    assert row == {"path": str(tmp_path / "gone.md"), "valid": False, "error": "missing_file"}


def test_main_reports_failures(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = tmp_path / "good.md"
    bad = tmp_path / "bad.md"
    _write_annotated(good, "Hello world")
    _write_annotated(bad, "Hello world")
    bad.write_text(bad.read_text(encoding="utf-8").replace("Hello", "Jello", 1), encoding="utf-8")

    assert main([str(good)]) == 0
    capsys.readouterr()

    assert main([str(good), str(bad)]) == 1
    payload = orjson.loads(capsys.readouterr().out)
    assert payload["status"] == "fail"
    assert payload["checked_files"] == 2
    assert payload["failures"] == [{"path": str(bad), "error": "Hash verification failed"}]


def test_main_json_detail(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "ok.md"
    _write_annotated(path, "Hello world")
    assert main([str(path), "--json"]) == 0
    payload = orjson.loads(capsys.readouterr().out)
    assert payload["ok"] is True
    (row,) = payload["results"]
    assert row["annotations"]["authors"] == {"&Claude": [{"start": 0, "length": 11}]}
