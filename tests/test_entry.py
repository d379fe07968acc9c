"""Tests for the entry model."""

import pytest

from bibparse.entry import AttributeValue, Entry, ValueKind
from bibparse.exceptions import InvalidDataError


def test_new_entry_is_empty() -> None:
    """A fresh entry has no type, key or attributes."""
    entry = Entry()

    assert entry.type == ""
    assert entry.identifier == ""
    assert dict(entry.attributes) == {}
    assert not entry.frozen


def test_attribute_order_follows_first_insertion() -> None:
    """Overwriting a key does not move it or duplicate it."""
    entry = Entry(type="book", identifier="b_id")
    entry.add_string("title", "First")
    entry.add_number("year", 1999)
    entry.add_string("title", "Second")

    assert entry.attribute_order == ["title", "year"]
    assert entry.get("title") == "Second"
    assert list(entry.attributes) == entry.attribute_order


def test_attributes_view_is_read_only() -> None:
    """The attribute mapping cannot be modified directly."""
    entry = Entry(type="book", identifier="b_id")
    entry.add_string("title", "x")

    with pytest.raises(TypeError):
        entry.attributes["title"] = AttributeValue.quoted("y")  # type: ignore[index]


def test_equality_ignores_attribute_order() -> None:
    """Entries compare by type, key and attribute mapping."""
    first = Entry(type="misc", identifier="k")
    first.add_string("a", "1")
    first.add_number("b", 2)
    second = Entry(type="misc", identifier="k")
    second.add_number("b", 2)
    second.add_string("a", "1")
    second.freeze()

    assert first == second


def test_value_kind_matters_for_equality() -> None:
    """The same text with a different tag is a different value."""
    assert AttributeValue.numeric("2001") != AttributeValue.quoted("2001")


@pytest.mark.parametrize("text", ["", "12a", "-5", "1.5"])
def test_numeric_value_must_be_digits(text: str) -> None:
    """Numeric values are restricted to runs of digits."""
    with pytest.raises(InvalidDataError):
        AttributeValue.numeric(text)


def test_numeric_value_from_int() -> None:
    """Integers are stored as their decimal text."""
    value = AttributeValue.numeric(42)

    assert value == AttributeValue(ValueKind.NUMERIC, "42")
    assert value.is_numeric


@pytest.mark.parametrize("key", ["", "two words", "a=b", "x,y", "{k}"])
def test_invalid_attribute_names(key: str) -> None:
    """Attribute names must be non-empty identifiers."""
    entry = Entry(type="misc", identifier="k")

    with pytest.raises(InvalidDataError):
        entry.add_string(key, "value")


def test_frozen_entry_rejects_attributes() -> None:
    """Freezing an entry ends its construction."""
    entry = Entry(type="misc", identifier="k")
    entry.freeze()

    with pytest.raises(InvalidDataError):
        entry.add_number("year", 2000)


def test_validate() -> None:
    """Type and citation key must be set."""
    Entry(type="book", identifier="b_id").validate()

    with pytest.raises(InvalidDataError):
        Entry(type="book").validate()
    with pytest.raises(InvalidDataError):
        Entry(identifier="b_id").validate()


def test_get_missing_attribute() -> None:
    """Missing attributes read as None."""
    assert Entry().get("title") is None
