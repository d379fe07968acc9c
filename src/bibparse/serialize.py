"""JSON export and import of entries."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

import msgspec

from .entry import AttributeValue, Entry, ValueKind
from .exceptions import InvalidDataError

logger = logging.getLogger(__name__)


class AttributeRecord(msgspec.Struct):
    """JSON shape of a single attribute."""

    key: str
    value: str
    kind: ValueKind = ValueKind.QUOTED


class EntryRecord(msgspec.Struct):
    """JSON shape of an entry; attributes are a list to keep their order."""

    type: str
    identifier: str
    attributes: list[AttributeRecord] = []


def to_record(entry: Entry) -> EntryRecord:
    return EntryRecord(
        type=entry.type,
        identifier=entry.identifier,
        attributes=[
            AttributeRecord(key=key, value=value.text, kind=value.kind)
            for key, value in entry.attributes.items()
        ],
    )


def from_record(record: EntryRecord) -> Entry:
    """Build a frozen entry from a validated record.

    Raises:
        InvalidDataError: If a name or numeric value is malformed
    """
    entry = Entry(type=record.type, identifier=record.identifier)
    entry.validate()
    for attribute in record.attributes:
        if attribute.kind is ValueKind.NUMERIC:
            value = AttributeValue.numeric(attribute.value)
        else:
            value = AttributeValue.quoted(attribute.value)
        entry.add_attribute(attribute.key, value)
    entry.freeze()
    return entry


def entries_to_json(entries: Iterable[Entry]) -> str:
    """Serialize entries to a JSON array."""
    records = [to_record(entry) for entry in entries]
    return json.dumps(msgspec.to_builtins(records), indent=2, ensure_ascii=False)


def entries_from_json(text: str | bytes) -> list[Entry]:
    """Load entries from a JSON array produced by :func:`entries_to_json`.

    Raises:
        InvalidDataError: If the JSON is malformed or does not match the record shape
    """
    try:
        raw_data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDataError(f"Invalid JSON: {e}") from e

    # Use msgspec for direct type-safe validation
    try:
        records = msgspec.convert(raw_data, type=list[EntryRecord])
    except msgspec.ValidationError as e:
        raise InvalidDataError(f"Invalid entry data: {e}") from e

    entries = [from_record(record) for record in records]
    logger.debug("Loaded %d entries from JSON", len(entries))
    return entries
