"""Tests for the extract CLI command."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

import main as cli_main
from src.cli.commands.extraction import build_parser, extract_cli

TEXT = "a guy named Bob Robertson who lives in Boston, MA"


@pytest.fixture()
def dictionaries(tmp_path: Path) -> Path:
    root = tmp_path / "dictionaries"
    root.mkdir()
    (root / "person.dict").write_text("Bob Robertson\n", encoding="utf-8")
    (root / "location.dict").write_text("Boston\nBoston, MA\n", encoding="utf-8")
    return root


@pytest.fixture()
def document(tmp_path: Path) -> Path:
    path = tmp_path / "doc.txt"
    path.write_text(TEXT, encoding="utf-8")
    return path


def test_extract_cli_outputs_json(dictionaries: Path, document: Path, capsys) -> None:
    parser = build_parser()
    args = parser.parse_args(
        ["--input", str(document), "--dictionaries", str(dictionaries), "--output-format", "json"]
    )

    exit_code = extract_cli(args)
    assert exit_code == 0

    out, _err = capsys.readouterr()
    payload = json.loads(out)
    assert payload["mention_count"] == 2
    assert payload["source_path"] == str(document)
    titles = {mention["title"]: mention for mention in payload["mentions"]}
    assert titles["Boston , MA"]["category"] == "location"
    assert (titles["Bob Robertson"]["start_offset"], titles["Bob Robertson"]["end_offset"]) == (12, 25)


def test_main_dispatches_extract_command(dictionaries: Path, document: Path, capsys) -> None:
    exit_code = cli_main.main(
        ["extract", "--input", str(document), "--dictionaries", str(dictionaries)]
    )

    assert exit_code == 0
    out, _err = capsys.readouterr()
    assert "Bob Robertson" in out
    assert "2 term mentions written." in out


def test_extract_cli_reports_missing_dictionaries(tmp_path: Path, document: Path, capsys) -> None:
    parser = build_parser()
    args = parser.parse_args(["--input", str(document), "--dictionaries", str(tmp_path / "none")])

    assert extract_cli(args) == 1
    _out, err = capsys.readouterr()
    assert "Initialization error" in err


def test_extract_cli_reports_bad_encoding(dictionaries: Path, tmp_path: Path, capsys) -> None:
    document = tmp_path / "binary.txt"
    document.write_bytes(b"Bob Robertson \xff")
    parser = build_parser()
    args = parser.parse_args(["--input", str(document), "--dictionaries", str(dictionaries)])

    assert extract_cli(args) == 1
    _out, err = capsys.readouterr()
    assert "Extraction failed" in err
