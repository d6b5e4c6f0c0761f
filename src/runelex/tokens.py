"""Token definitions for the runelex engine.

A run produces a stream of grammar tokens closed by exactly one terminal
token. The three shapes form a tagged union:

- Token: a grammar token. Its ``type`` is chosen by the grammar author
  (usually an Enum member) and is opaque to the engine.
- EndOfStream: the input was scanned to completion.
- ErrorToken: a grammar signalled an unrecoverable scan error.

Terminal tokens report a ``type`` from TokenKind, an enum owned by the
engine, so they can never be confused with a grammar's own token types.

Thread Safety:
All token classes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TypeAlias

# Values longer than this are truncated by str(Token)
MAX_DISPLAY_LENGTH = 200


class TokenKind(Enum):
    """Token types reserved by the engine for terminal tokens."""

    EOF = auto()
    ERROR = auto()


def _type_name(token_type: Hashable) -> str:
    name = getattr(token_type, "name", None)
    return name if isinstance(name, str) else repr(token_type)


def _compact(value: str) -> str:
    if len(value) > 20:
        value = value[:17] + "..."
    return repr(value)


@dataclass(frozen=True, slots=True)
class Token:
    """A grammar token.

    Attributes:
        type: Grammar-chosen token type
        value: Text of the input between start and end
        start: Offset where the token begins
        end: Offset just past the token

    """

    type: Hashable
    value: str
    start: int
    end: int

    def __str__(self) -> str:
        if len(self.value) > MAX_DISPLAY_LENGTH:
            return f"{self.value[:MAX_DISPLAY_LENGTH]!r}..."
        return self.value

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        return f"Token({_type_name(self.type)}, {_compact(self.value)}, {self.start}:{self.end})"


@dataclass(frozen=True, slots=True)
class EndOfStream:
    """Terminal token marking the end of a successful run.

    Attributes:
        offset: Cursor offset when the stream ended

    """

    offset: int

    @property
    def type(self) -> TokenKind:
        return TokenKind.EOF

    @property
    def value(self) -> str:
        return ""

    def __str__(self) -> str:
        return "EOF"

    def __repr__(self) -> str:
        return f"EndOfStream({self.offset})"


@dataclass(frozen=True, slots=True)
class ErrorToken:
    """Terminal token carrying a grammar's diagnostic message.

    Attributes:
        message: Formatted diagnostic text
        offset: Cursor offset when the error was signalled

    """

    message: str
    offset: int

    @property
    def type(self) -> TokenKind:
        return TokenKind.ERROR

    @property
    def value(self) -> str:
        return self.message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ErrorToken({_compact(self.message)}, {self.offset})"


AnyToken: TypeAlias = Token | EndOfStream | ErrorToken


def is_terminal(token: AnyToken) -> bool:
    """True for EndOfStream and ErrorToken."""
    return isinstance(token, (EndOfStream, ErrorToken))


__all__ = [
    "AnyToken",
    "EndOfStream",
    "ErrorToken",
    "MAX_DISPLAY_LENGTH",
    "Token",
    "TokenKind",
    "is_terminal",
]
