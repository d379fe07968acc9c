"""In-memory model of a BibTeX entry."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .exceptions import InvalidDataError
from .runes import is_digit, is_identifier_char

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    NUMERIC = "numeric"
    QUOTED = "quoted"


@dataclass(frozen=True)
class AttributeValue:
    """A tagged attribute value.

    The tag only changes how the value is rendered: numeric values are written
    bare, quoted values inside delimiters.
    """

    kind: ValueKind
    text: str

    @classmethod
    def numeric(cls, text: str | int) -> AttributeValue:
        """Create a numeric value.

        Raises:
            InvalidDataError: If ``text`` is not a run of decimal digits
        """
        text = str(text)
        if not text or not all(is_digit(char) for char in text):
            raise InvalidDataError(f"Numeric value must be a run of digits, got {text!r}")
        return cls(ValueKind.NUMERIC, text)

    @classmethod
    def quoted(cls, text: str) -> AttributeValue:
        return cls(ValueKind.QUOTED, text)

    @property
    def is_numeric(self) -> bool:
        return self.kind is ValueKind.NUMERIC


def _check_name(name: str, what: str) -> None:
    if not name or not all(is_identifier_char(char) for char in name):
        raise InvalidDataError(f"Invalid {what}: {name!r}")


_FROZEN_FIELDS = frozenset({"type", "identifier", "_attributes"})


@dataclass
class Entry:
    """One bibliographic record, ``@type{identifier, key = value, ...}``.

    Attributes keep the order in which keys were first added; that order is what
    renderers walk. Re-adding a key replaces its value in place.

    Attributes:
        type: Entry type as written, e.g. ``book``
        identifier: Citation key
    """

    type: str = ""
    identifier: str = ""
    _attributes: dict[str, AttributeValue] = field(default_factory=dict, repr=False)
    _frozen: bool = field(default=False, compare=False, repr=False)

    def __setattr__(self, name: str, value: object) -> None:
        # _frozen is not set yet while __init__ assigns the other fields
        if name in _FROZEN_FIELDS and getattr(self, "_frozen", False):
            raise InvalidDataError(f"Entry '{self.identifier}' is frozen, cannot set {name}")
        super().__setattr__(name, value)

    @property
    def attributes(self) -> Mapping[str, AttributeValue]:
        """Read-only view of the attributes, in insertion order."""
        return MappingProxyType(self._attributes)

    @property
    def attribute_order(self) -> list[str]:
        return list(self._attributes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject further mutation; called once the entry is handed to a caller."""
        self._frozen = True

    def add_attribute(self, key: str, value: AttributeValue) -> None:
        """Add or replace an attribute.

        Args:
            key: Attribute name, case as written
            value: Tagged value

        Raises:
            InvalidDataError: If the entry is frozen or ``key`` is not an identifier
        """
        if self._frozen:
            raise InvalidDataError(f"Entry '{self.identifier}' is frozen")
        _check_name(key, "attribute name")

        if key in self._attributes:
            logger.debug("Attribute '%s' repeated in entry '%s'", key, self.identifier)
        self._attributes[key] = value

    def add_number(self, key: str, value: int | str) -> None:
        self.add_attribute(key, AttributeValue.numeric(value))

    def add_string(self, key: str, value: str) -> None:
        self.add_attribute(key, AttributeValue.quoted(value))

    def get(self, key: str) -> str | None:
        """Return the text of attribute ``key``, or ``None`` if absent."""
        value = self._attributes.get(key)
        return value.text if value is not None else None

    def validate(self) -> None:
        """Check that type and identifier are set to valid identifiers.

        Raises:
            InvalidDataError: If either is empty or contains a delimiter
        """
        _check_name(self.type, "entry type")
        _check_name(self.identifier, "citation key")
