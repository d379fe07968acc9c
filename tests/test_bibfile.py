"""Tests for .bib file helpers."""

from pathlib import Path

import pytest

from bibparse.bibfile import read_entries, read_entry, write_entries
from bibparse.config import RenderConfig
from bibparse.exceptions import ParseError

LIBRARY = """Header text that is not an entry.

@book{b_id,
 title = "Wonderful story",
 year = 1999,
}

@misc{broken, = 1}

@misc{k, note = {Kept}}
"""


def test_read_entries(tmp_path: Path) -> None:
    """Well-formed entries are read in order, broken ones skipped."""
    bib_path = tmp_path / "library.bib"
    bib_path.write_text(LIBRARY, encoding="utf-8")

    entries = read_entries(bib_path)

    assert [entry.identifier for entry in entries] == ["b_id", "k"]


def test_read_entry(tmp_path: Path) -> None:
    """The first entry of a file is returned."""
    bib_path = tmp_path / "library.bib"
    bib_path.write_text(LIBRARY, encoding="utf-8")

    assert read_entry(bib_path).identifier == "b_id"


def test_read_entry_without_entry(tmp_path: Path) -> None:
    """A file with no entry fails to parse."""
    bib_path = tmp_path / "empty.bib"
    bib_path.write_text("nothing here\n", encoding="utf-8")

    with pytest.raises(ParseError):
        read_entry(bib_path)


def test_missing_file(tmp_path: Path) -> None:
    """Reading a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        read_entries(tmp_path / "missing.bib")


def test_write_and_read_back(tmp_path: Path) -> None:
    """Written files contain the canonical form and parse back."""
    source = tmp_path / "library.bib"
    source.write_text(LIBRARY, encoding="utf-8")
    entries = read_entries(source)
    target = tmp_path / "out" / "formatted.bib"

    count = write_entries(entries, target, RenderConfig(align=False))

    assert count == 2
    content = target.read_text(encoding="utf-8")
    assert content.startswith('@book{b_id,\n title = "Wonderful story",\n year = 1999,\n}\n\n')
    assert content.endswith("}\n")
    assert read_entries(target) == entries
