"""Custom exception types for bibparse operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokens import Token, TokenKind


class BibparseError(Exception):
    """Base exception for all bibparse operations."""


class LexError(BibparseError):
    """Raised when the scanner could not classify the input.

    Attributes:
        message: Scanner message (e.g. ``unclosed string``)
        offset: Character offset where scanning stopped
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"offset {offset}: {message}")
        self.message = message
        self.offset = offset


class ParseError(BibparseError):
    """Raised when the token stream does not match the entry grammar.

    Attributes:
        token: The token that was actually read
        expected: The token kind the grammar required at that point
    """

    def __init__(self, token: Token, expected: TokenKind) -> None:
        super().__init__(
            f"offset {token.offset}: unexpected token: {token} (expected {expected.label})"
        )
        self.token = token
        self.expected = expected


class InvalidDataError(BibparseError):
    """Raised when entry data validation fails."""


class FileOperationError(BibparseError):
    """Raised when file I/O operations fail."""
