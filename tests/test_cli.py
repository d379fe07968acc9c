"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from bibparse.cli import main

LIBRARY = """@book{b_id,
 title = "Wonderful story",
 year = 1999,
}

@misc{broken, = 1}
"""


@pytest.fixture
def bib_path(tmp_path: Path) -> Path:
    path = tmp_path / "library.bib"
    path.write_text(LIBRARY, encoding="utf-8")
    return path


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    code = exc_info.value.code
    return code if isinstance(code, int) else 1


def test_check_reports_counts(bib_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """check prints parsed and skipped counts."""
    assert run(["check", str(bib_path)]) == 0

    assert "1 parsed, 1 skipped" in capsys.readouterr().out


def test_check_strict_fails_on_skipped(bib_path: Path) -> None:
    """--strict turns skipped entries into a failure."""
    assert run(["check", "--strict", str(bib_path)]) == 1


def test_check_missing_file(tmp_path: Path) -> None:
    """A missing file is an error."""
    assert run(["check", str(tmp_path / "missing.bib")]) == 1


def test_format_to_stdout(bib_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """format prints the canonical form."""
    assert run(["format", str(bib_path)]) == 0

    assert capsys.readouterr().out == (
        '@book{b_id,\n title = "Wonderful story",\n year  = 1999,\n}\n'
    )


def test_format_in_place(bib_path: Path) -> None:
    """--in-place rewrites the input without the broken entry."""
    assert run(["format", "--in-place", "--no-align", "--indent", "2", str(bib_path)]) == 0

    assert bib_path.read_text(encoding="utf-8") == (
        '@book{b_id,\n  title = "Wonderful story",\n  year = 1999,\n}\n'
    )


def test_tokens(bib_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """tokens dumps one token per line."""
    assert run(["tokens", str(bib_path)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["0", "entryStart", '"@"']
    assert lines[-1].split()[-1] == "EOF"


def test_json_to_file(bib_path: Path, tmp_path: Path) -> None:
    """json writes the exported entries to the output file."""
    output = tmp_path / "out" / "entries.json"

    assert run(["json", str(bib_path), "-o", str(output)]) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert [record["identifier"] for record in data] == ["b_id"]


def test_export(bib_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """export writes through bibtexparser."""
    assert run(["export", str(bib_path)]) == 0

    out = capsys.readouterr().out
    assert "@book{b_id," in out
    assert "Wonderful story" in out


def test_no_command() -> None:
    """Running without a subcommand prints help and fails."""
    assert run([]) == 1


def test_tokens_undecodable_file(tmp_path: Path) -> None:
    """A file that is not UTF-8 is reported instead of crashing."""
    path = tmp_path / "latin1.bib"
    path.write_bytes("@book{k, title = {Caf\u00e9}}".encode("latin-1"))

    assert run(["tokens", str(path)]) == 1


def test_tokens_missing_file(tmp_path: Path) -> None:
    """A missing file is an error."""
    assert run(["tokens", str(tmp_path / "missing.bib")]) == 1
