"""State-machine scanner turning BibTeX text into tokens.

The scanner is pull-based: :meth:`Scanner.step` runs the handler for the current
state, which consumes zero or more characters and produces at most one token
before choosing the next state. Iterating a :class:`Scanner` drives ``step``
only as far as the consumer asks, so abandoning the iterator leaves nothing
running.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum, auto

from .runes import is_digit, is_identifier_char, is_whitespace
from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)

EOF = ""

ENTRY_START = "@"
LEFT_BRACE = "{"
RIGHT_BRACE = "}"
COMMA = ","
EQUALS = "="
QUOTE = '"'
ESCAPE = "\\"


class LexState(Enum):
    """Grammar region the scanner is currently in."""

    TOP_LEVEL = auto()
    ENTRY_TYPE = auto()
    ENTRY_OPEN = auto()
    ENTRY_BODY = auto()
    WORD = auto()
    QUOTED_STRING = auto()
    BRACED_VALUE = auto()
    DONE = auto()


class Scanner:
    """Tokenizer for a single BibTeX document.

    Attributes:
        text: The input being scanned
        state: Current grammar region; ``DONE`` once no more tokens will follow
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.state = LexState.TOP_LEVEL
        self._start = 0  # start of the pending token
        self._pos = 0  # next character to read
        self._width = 0  # width of the last character read, for backup
        self._handlers: dict[LexState, Callable[[], Token | None]] = {
            LexState.TOP_LEVEL: self._lex_top_level,
            LexState.ENTRY_TYPE: self._lex_entry_type,
            LexState.ENTRY_OPEN: self._lex_entry_open,
            LexState.ENTRY_BODY: self._lex_entry_body,
            LexState.WORD: self._lex_word,
            LexState.QUOTED_STRING: self._lex_quoted_string,
            LexState.BRACED_VALUE: self._lex_braced_value,
        }

    def __iter__(self) -> Iterator[Token]:
        while self.state is not LexState.DONE:
            token = self.step()
            if token is not None:
                yield token

    @property
    def done(self) -> bool:
        return self.state is LexState.DONE

    def step(self) -> Token | None:
        """Advance the state machine by one state.

        Returns:
            The token completed during this step, if any.

        Raises:
            RuntimeError: If called after the scan has finished.
        """
        if self.state is LexState.DONE:
            raise RuntimeError("scanner has already reached the end of input")
        return self._handlers[self.state]()

    # character primitives

    def _next(self) -> str:
        if self._pos >= len(self.text):
            self._width = 0
            return EOF
        char = self.text[self._pos]
        self._width = 1
        self._pos += 1
        return char

    def _backup(self) -> None:
        self._pos -= self._width
        self._width = 0

    def _peek(self) -> str:
        char = self._next()
        self._backup()
        return char

    def _ignore(self) -> None:
        self._start = self._pos

    def _accept_run(self, predicate: Callable[[str], bool]) -> None:
        while predicate(self._next()):
            pass
        self._backup()

    def _skip_whitespace(self) -> None:
        self._accept_run(is_whitespace)
        self._ignore()

    def _emit(self, kind: TokenKind) -> Token:
        token = Token(kind, self.text[self._start : self._pos], self._start)
        self._start = self._pos
        return token

    def _fail(self, message: str) -> Token:
        """Produce a terminating error token; nothing is scanned afterwards."""
        logger.debug("Scan stopped at offset %d: %s", self._pos, message)
        self.state = LexState.DONE
        return Token(TokenKind.ERROR, message, self._pos)

    def _recover(self, message: str) -> Token:
        """Produce an error token and resynchronize on the next entry."""
        logger.debug("Scan error at offset %d, resynchronizing: %s", self._pos, message)
        self._ignore()
        self.state = LexState.TOP_LEVEL
        return Token(TokenKind.ERROR, message, self._pos)

    # state handlers

    def _lex_top_level(self) -> Token | None:
        while True:
            char = self._next()
            if char == ENTRY_START:
                skipped = self._pos - 1 - self._start
                if skipped:
                    logger.debug("Skipped %d characters before offset %d", skipped, self._pos - 1)
                self._start = self._pos - 1
                self.state = LexState.ENTRY_TYPE
                return self._emit(TokenKind.ENTRY_START)
            if char == EOF:
                self._ignore()
                self.state = LexState.DONE
                return self._emit(TokenKind.END_OF_INPUT)

    def _lex_entry_type(self) -> Token | None:
        self._skip_whitespace()
        char = self._peek()
        if char == EOF:
            return self._fail("unclosed entry")

        self._accept_run(is_identifier_char)
        if self._pos == self._start:
            return self._recover(f"expected entry type, found {char!r}")

        self.state = LexState.ENTRY_OPEN
        return self._emit(TokenKind.IDENTIFIER)

    def _lex_entry_open(self) -> Token | None:
        self._skip_whitespace()
        char = self._next()
        if char == EOF:
            return self._fail("unclosed entry")
        if is_identifier_char(char):
            # stray text before the opening brace
            self._backup()
            self.state = LexState.ENTRY_TYPE
            return None
        if char == LEFT_BRACE:
            self.state = LexState.ENTRY_BODY
            return self._emit(TokenKind.LEFT_BRACE)

        self._backup()
        return self._recover(f"unexpected input before entry body: {char!r}")

    def _lex_entry_body(self) -> Token | None:
        self._skip_whitespace()
        char = self._next()
        if char == EOF:
            return self._fail("unclosed entry")
        if is_identifier_char(char):
            self._backup()
            self.state = LexState.WORD
            return None
        if char == RIGHT_BRACE:
            self.state = LexState.TOP_LEVEL
            return self._emit(TokenKind.RIGHT_BRACE)
        if char == COMMA:
            return self._emit(TokenKind.COMMA)
        if char == EQUALS:
            return self._emit(TokenKind.EQUALS)
        if char == QUOTE:
            self._ignore()
            self.state = LexState.QUOTED_STRING
            return None
        if char == LEFT_BRACE:
            self._ignore()
            self.state = LexState.BRACED_VALUE
            return None

        self._backup()
        return self._recover(f"unexpected input in entry body: {char!r}")

    def _lex_word(self) -> Token | None:
        self._accept_run(is_identifier_char)
        word = self.text[self._start : self._pos]
        self.state = LexState.ENTRY_BODY
        if all(is_digit(char) for char in word):
            return self._emit(TokenKind.NUMBER)
        return self._emit(TokenKind.IDENTIFIER)

    def _lex_quoted_string(self) -> Token | None:
        while True:
            char = self._next()
            if char == EOF:
                return self._fail("unclosed string")
            if char == ESCAPE:
                self._next()
            elif char == QUOTE:
                self._backup()
                token = self._emit(TokenKind.QUOTED_STRING)
                self._next()
                self._ignore()
                self.state = LexState.ENTRY_BODY
                return token

    def _lex_braced_value(self) -> Token | None:
        while True:
            char = self._next()
            if char == EOF:
                return self._fail("unclosed value")
            if char == RIGHT_BRACE:
                self._backup()
                token = self._emit(TokenKind.BRACED_STRING)
                self._next()
                self._ignore()
                self.state = LexState.ENTRY_BODY
                return token


def tokenize(text: str) -> Iterator[Token]:
    """Lazily tokenize BibTeX text.

    Args:
        text: Document text, possibly holding many entries and free text

    Returns:
        An iterator of tokens ending with ``END_OF_INPUT``, or with an
        ``ERROR`` token when the input ends inside an entry.
    """
    return iter(Scanner(text))
