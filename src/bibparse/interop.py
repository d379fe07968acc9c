"""Conversion between bibparse entries and the bibtexparser v2 model."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import bibtexparser
from bibtexparser.library import Library
from bibtexparser.model import Entry as BibtexparserEntry
from bibtexparser.model import Field

from .entry import AttributeValue, Entry
from .exceptions import InvalidDataError
from .runes import is_digit

logger = logging.getLogger(__name__)


def to_bibtexparser(entry: Entry) -> BibtexparserEntry:
    """Convert an entry to a bibtexparser entry, keeping attribute order."""
    fields = [Field(key, value.text) for key, value in entry.attributes.items()]
    return BibtexparserEntry(entry_type=entry.type, key=entry.identifier, fields=fields)


def from_bibtexparser(bp_entry: BibtexparserEntry) -> Entry:
    """Convert a bibtexparser entry to a frozen entry.

    Field values made only of digits become numeric values, everything else is
    quoted. Non-string values (e.g. unresolved string references) are converted
    with ``str``.

    Raises:
        InvalidDataError: If the type, key or a field name is not an identifier
    """
    entry = Entry(type=bp_entry.entry_type, identifier=bp_entry.key)
    entry.validate()
    for field in bp_entry.fields:
        text = str(field.value)
        if text and all(is_digit(char) for char in text):
            entry.add_attribute(field.key, AttributeValue.numeric(text))
        else:
            entry.add_attribute(field.key, AttributeValue.quoted(text))
    entry.freeze()
    return entry


def to_library(entries: Iterable[Entry]) -> Library:
    return Library([to_bibtexparser(entry) for entry in entries])


def write_bibtexparser(entries: Iterable[Entry]) -> str:
    """Render entries through bibtexparser's writer."""
    library = to_library(entries)
    logger.debug("Writing %d entries with bibtexparser", len(library.entries))
    return str(bibtexparser.write_string(library))


def parse_with_bibtexparser(text: str) -> list[Entry]:
    """Parse ``text`` with bibtexparser and convert the resulting entries.

    Blocks bibtexparser could not parse, and entries whose names are not valid
    identifiers here, are logged and skipped.
    """
    library = bibtexparser.parse_string(text)
    if library.failed_blocks:
        logger.warning(f"bibtexparser could not parse {len(library.failed_blocks)} blocks")

    entries: list[Entry] = []
    for bp_entry in library.entries:
        try:
            entries.append(from_bibtexparser(bp_entry))
        except InvalidDataError as e:
            logger.warning(f"Skipping entry '{bp_entry.key}': {e}")
    return entries
