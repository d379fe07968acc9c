"""Reading and writing .bib files."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .config import RenderConfig
from .entry import Entry
from .exceptions import FileOperationError
from .parser import parse_entries, parse_entry
from .render import render_entries

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read a .bib file as UTF-8 text.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        FileOperationError: If the file cannot be read or decoded
    """
    if not path.exists():
        raise FileNotFoundError(f"Bibliography file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(f"Failed to read {path}: {exc}") from exc


def read_entries(path: Path) -> list[Entry]:
    """Read every well-formed entry from a .bib file.

    Args:
        path: Path to the .bib file

    Returns:
        Entries in document order; malformed entries are skipped

    Raises:
        FileNotFoundError: If ``path`` does not exist
        FileOperationError: If the file cannot be read
    """
    logger.debug("Loading entries from %s", path)
    entries = parse_entries(read_text(path))
    logger.info(f"Read {len(entries)} entries from {path}")
    return entries


def read_entry(path: Path) -> Entry:
    """Read the first entry of a .bib file, which must be well formed.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        FileOperationError: If the file cannot be read
        LexError: If the scanner failed inside the entry
        ParseError: If the file holds no complete entry
    """
    return parse_entry(read_text(path))


def write_entries(
    entries: Iterable[Entry], path: Path, config: RenderConfig | None = None
) -> int:
    """Write entries to ``path`` in canonical form.

    Returns:
        Number of entries written

    Raises:
        FileOperationError: If the file cannot be written
    """
    entry_list = list(entries)
    text = render_entries(entry_list, config)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n" if text else "")
    except OSError as exc:
        raise FileOperationError(f"Failed to write {path}: {exc}") from exc

    logger.info(f"Wrote {len(entry_list)} entries to {path}")
    return len(entry_list)
