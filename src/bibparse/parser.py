"""Recursive-descent parser building entries from a token stream.

Grammar::

    entry     := ENTRY_START IDENTIFIER LEFT_BRACE body
    body      := IDENTIFIER valueList
    valueList := (COMMA? IDENTIFIER EQUALS value)* COMMA? RIGHT_BRACE
    value     := QUOTED_STRING | BRACED_STRING | NUMBER | IDENTIFIER
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .entry import AttributeValue, Entry
from .exceptions import BibparseError, LexError, ParseError
from .lexer import tokenize
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class Parser:
    """Pulls tokens one at a time and assembles entries.

    Attributes:
        last_token: The most recently read token, ``None`` before the first read
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self.last_token: Token | None = None

    @property
    def exhausted(self) -> bool:
        """``True`` once the end of the token stream has been read."""
        return self.last_token is not None and self.last_token.kind is TokenKind.END_OF_INPUT

    def next_token(self) -> Token:
        token = next(self._tokens, None)
        if token is None:
            # the scanner stopped, possibly after a terminating error token
            offset = self.last_token.offset if self.last_token is not None else 0
            token = Token(TokenKind.END_OF_INPUT, "", offset)
        self.last_token = token
        return token

    def accept(self, kind: TokenKind) -> bool:
        """Read the next token and report whether it is of ``kind``."""
        return self.next_token().kind is kind

    def expect(self, kind: TokenKind) -> Token:
        """Read the next token, which must be of ``kind``.

        Raises:
            LexError: If the scanner reported an error instead
            ParseError: If the token is of another kind
        """
        token = self.next_token()
        if token.kind is not kind:
            raise self._unexpected(token, kind)
        return token

    def parse_one(self) -> Entry:
        """Parse the next entry from the stream.

        Returns:
            The completed entry, frozen

        Raises:
            LexError: If the scanner failed inside the entry
            ParseError: If the tokens do not form an entry
        """
        entry = Entry()
        self.expect(TokenKind.ENTRY_START)
        entry.type = self.expect(TokenKind.IDENTIFIER).text
        self.expect(TokenKind.LEFT_BRACE)
        self._body(entry)
        entry.freeze()
        return entry

    def parse_all(self) -> list[Entry]:
        """Parse every well-formed entry left in the stream.

        Entries that fail to parse are dropped; the scanner resynchronizes on the
        next ``@`` so the following entry is still found.
        """
        entries: list[Entry] = []
        dropped = 0
        while not self.exhausted:
            try:
                entries.append(self.parse_one())
            except ParseError as exc:
                if exc.token.kind is TokenKind.END_OF_INPUT and (
                    exc.expected is TokenKind.ENTRY_START
                ):
                    break
                logger.debug("Dropped malformed entry: %s", exc)
                dropped += 1
            except BibparseError as exc:
                logger.debug("Dropped malformed entry: %s", exc)
                dropped += 1

        if dropped:
            logger.debug("Skipped %d malformed entries, kept %d", dropped, len(entries))
        return entries

    def _body(self, entry: Entry) -> None:
        entry.identifier = self.expect(TokenKind.IDENTIFIER).text
        self._value_list(entry)

    def _value_list(self, entry: Entry) -> None:
        separated = self.accept(TokenKind.COMMA)
        while True:
            token = self.next_token() if separated else self._current()
            if token.kind is TokenKind.RIGHT_BRACE:
                return
            if token.kind is not TokenKind.IDENTIFIER:
                raise self._unexpected(token, TokenKind.IDENTIFIER)

            self.expect(TokenKind.EQUALS)
            entry.add_attribute(token.text, self._value())
            separated = self.accept(TokenKind.COMMA)

    def _value(self) -> AttributeValue:
        token = self.next_token()
        if token.kind is TokenKind.NUMBER:
            return AttributeValue.numeric(token.text)
        if token.kind.is_value:
            # quoted, braced and bare words are all string-typed
            return AttributeValue.quoted(token.text)
        raise self._unexpected(token, TokenKind.QUOTED_STRING)

    def _current(self) -> Token:
        if self.last_token is None:
            raise RuntimeError("no token has been read yet")
        return self.last_token

    def _unexpected(self, token: Token, expected: TokenKind) -> BibparseError:
        if token.kind is TokenKind.ERROR:
            return LexError(token.text, token.offset)
        return ParseError(token, expected)


def parse_entry(text: str) -> Entry:
    """Parse exactly one entry, starting at the first ``@`` in ``text``.

    Text before the entry is skipped; anything after it is never scanned.

    Raises:
        LexError: If the scanner failed inside the entry
        ParseError: If no complete, well-formed entry was found
    """
    return Parser(tokenize(text)).parse_one()


def parse_entries(text: str) -> list[Entry]:
    """Extract every well-formed entry from ``text``, in document order.

    Malformed entries and free text between entries are skipped silently.
    """
    return Parser(tokenize(text)).parse_all()
