"""Canonical BibTeX output for entries."""

from __future__ import annotations

from collections.abc import Iterable

from .config import RenderConfig
from .entry import AttributeValue, Entry
from .exceptions import InvalidDataError


def _fits_in_quotes(text: str) -> bool:
    """Return ``True`` if ``text`` scans back unchanged between double quotes.

    A backslash escapes the next character, so a bare quote or a trailing
    backslash would end or swallow the closing delimiter.
    """
    escaped = False
    for char in text:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            return False
    return not escaped


def render_value(value: AttributeValue) -> str:
    """Render a single attribute value.

    Numeric values are written bare. Quoted values are written in double quotes
    when they scan back unchanged, otherwise in braces.

    Raises:
        InvalidDataError: If the text fits in neither delimiter
    """
    if value.is_numeric:
        return value.text
    if _fits_in_quotes(value.text):
        return f'"{value.text}"'
    if "}" not in value.text:
        return f"{{{value.text}}}"
    raise InvalidDataError(f"Value cannot be written as BibTeX: {value.text!r}")


def render(entry: Entry, config: RenderConfig | None = None) -> str:
    """Render ``entry`` as canonical BibTeX.

    Attributes are written in insertion order, one per line, each followed by a
    comma::

        @book{b_id,
         title = "Wonderful story",
         year  = 1999,
        }

    Raises:
        InvalidDataError: If the type or key is not an identifier, or a value
            cannot be written so that it parses back unchanged
    """
    config = config or RenderConfig()
    entry.validate()

    width = max((len(key) for key in entry.attributes), default=0) if config.align else 0
    lines = [f"@{entry.type}{{{entry.identifier},"]
    for key, value in entry.attributes.items():
        lines.append(f"{config.indent}{key:<{width}} = {render_value(value)},")
    lines.append("}")
    return "\n".join(lines)


def render_entries(entries: Iterable[Entry], config: RenderConfig | None = None) -> str:
    """Render several entries separated by blank lines."""
    return "\n\n".join(render(entry, config) for entry in entries)
