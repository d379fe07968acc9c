"""Lexer tokens."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

# Values longer than this are truncated when a token is printed
DISPLAY_WIDTH = 30


class TokenKind(Enum):
    ENTRY_START = "@"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"
    COMMA = ","
    EQUALS = "="
    QUOTED_STRING = "quoted string"
    BRACED_STRING = "braced string"
    END_OF_INPUT = "EOF"
    ERROR = "error"

    @property
    def label(self) -> str:
        """Short label used in token dumps and error messages."""
        if self is TokenKind.ENTRY_START:
            return "entryStart"
        if self in (TokenKind.QUOTED_STRING, TokenKind.BRACED_STRING):
            return "string"
        return self.value

    @property
    def is_value(self) -> bool:
        return self in (
            TokenKind.QUOTED_STRING,
            TokenKind.BRACED_STRING,
            TokenKind.NUMBER,
            TokenKind.IDENTIFIER,
        )


@dataclass(frozen=True)
class Token:
    """A classified lexical unit.

    Attributes:
        kind: The kind of token.
        text: The exact source slice, or the message for ``ERROR`` tokens.
        offset: Character offset where the token starts.
    """

    kind: TokenKind
    text: str
    offset: int = 0

    def __str__(self) -> str:
        if self.kind is TokenKind.END_OF_INPUT:
            return "EOF"
        if self.kind is TokenKind.ERROR:
            return f"error: {self.text}"

        label = self.kind.label
        # punctuation prints as itself
        if label == self.text:
            return label

        if len(self.text) > DISPLAY_WIDTH:
            shown = json.dumps(self.text[:DISPLAY_WIDTH], ensure_ascii=False)
            return f"{label} {shown}..."
        return f"{label} {json.dumps(self.text, ensure_ascii=False)}"
