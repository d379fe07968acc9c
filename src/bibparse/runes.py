"""Character predicates used by the scanner."""

WHITESPACE = frozenset(" \t\n\r")

# Characters that end an identifier run. Everything else, punctuation included,
# may appear in entry types, citation keys, attribute names and bare values.
NON_IDENTIFIER = frozenset(" \\\t{}\"@,=%#\n\r~")


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE


def is_identifier_char(char: str) -> bool:
    """Return ``True`` if ``char`` can be part of an identifier.

    The empty string is the scanner's end-of-input sentinel and never matches.
    """
    return char != "" and char not in NON_IDENTIFIER


def is_digit(char: str) -> bool:
    return char != "" and char.isdecimal()
