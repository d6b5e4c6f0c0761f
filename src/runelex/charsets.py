"""Character sets and classifiers for grammar authors.

The sets are frozensets so they can be passed straight to
``Lexer.accept`` and ``Lexer.accept_run``.

Usage:
    from runelex.charsets import DIGITS

    lexer.accept_run(DIGITS)
"""

import unicodedata

DIGITS: frozenset[str] = frozenset("0123456789")

HEX_DIGITS: frozenset[str] = DIGITS | frozenset("abcdefABCDEF")

ASCII_LETTERS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

# Identifier body characters for ASCII grammars
ASCII_IDENT: frozenset[str] = ASCII_LETTERS | DIGITS | frozenset("_")

WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")


def is_space(char: str) -> bool:
    """Check if char is Unicode whitespace. EOF ("") is not."""
    return char.isspace() if char else False


def is_alpha(char: str) -> bool:
    """Check if char is a Unicode letter (category L*). EOF ("") is not."""
    if not char:
        return False
    return unicodedata.category(char).startswith("L")


def is_alnum(char: str) -> bool:
    """Check if char is a Unicode letter or decimal digit."""
    return is_alpha(char) or (bool(char) and char.isdecimal())


__all__ = [
    "ASCII_IDENT",
    "ASCII_LETTERS",
    "DIGITS",
    "HEX_DIGITS",
    "WHITESPACE",
    "is_alnum",
    "is_alpha",
    "is_space",
]
