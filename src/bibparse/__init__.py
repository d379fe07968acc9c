"""BibTeX entry scanner, parser and renderer."""

import logging

from .config import RenderConfig
from .entry import AttributeValue, Entry, ValueKind
from .exceptions import BibparseError, LexError, ParseError
from .lexer import tokenize
from .parser import parse_entries, parse_entry
from .render import render, render_entries

__all__ = [
    "AttributeValue",
    "BibparseError",
    "Entry",
    "LexError",
    "ParseError",
    "RenderConfig",
    "ValueKind",
    "parse_entries",
    "parse_entry",
    "render",
    "render_entries",
    "tokenize",
]

# Install a NullHandler to avoid emitting logs unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
