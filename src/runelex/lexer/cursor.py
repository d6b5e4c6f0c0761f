"""Cursor mixin: reading, backtracking and lookahead over the input.

Input is either ``str`` or UTF-8 ``bytes``. Offsets are in the input's
own units: one per character for ``str``, one per byte for ``bytes``.
Each read records the width of the character it decoded so that exactly
one read can be undone.
"""

from __future__ import annotations

from collections.abc import Container

from runelex.errors import CursorError
from runelex.location import SourceLocation

# Returned by read() and peek() at end of input
EOF = ""

REPLACEMENT_CHAR = "\ufffd"


def decode_rune(data: bytes, pos: int) -> tuple[str, int]:
    """Decode one UTF-8 encoded character of data at pos.

    Malformed or truncated sequences decode as U+FFFD with width 1, so the
    scan always moves forward.

    Returns:
        (character, width in bytes)
    """
    lead = data[pos]
    if lead < 0x80:
        return chr(lead), 1
    if 0xC2 <= lead <= 0xDF:
        size = 2
    elif 0xE0 <= lead <= 0xEF:
        size = 3
    elif 0xF0 <= lead <= 0xF4:
        size = 4
    else:
        return REPLACEMENT_CHAR, 1
    try:
        return data[pos : pos + size].decode("utf-8"), size
    except UnicodeDecodeError:
        return REPLACEMENT_CHAR, 1


class CursorMixin:
    """Mixin providing the cursor primitives used by scanning actions.

    Maintains ``0 <= start <= current <= len(source)`` across every
    primitive.

    """

    # These will be set by the Lexer class
    name: str
    _source: str | bytes
    _source_len: int
    _is_bytes: bool
    _start: int
    _pos: int
    _width: int
    _can_backtrack: bool
    _strict_backtrack: bool

    # =========================================================================
    # Position accessors
    # =========================================================================

    @property
    def source(self) -> str | bytes:
        """The input being scanned."""
        return self._source

    @property
    def start(self) -> int:
        """Offset where the pending region begins."""
        return self._start

    @property
    def current(self) -> int:
        """Offset of the next unread unit."""
        return self._pos

    @property
    def width(self) -> int:
        """Width of the most recently read character (0 after EOF or backtrack)."""
        return self._width

    @property
    def at_eof(self) -> bool:
        return self._pos >= self._source_len

    @property
    def pending(self) -> str:
        """Text of the pending region, not yet emitted."""
        return self._text(self._start, self._pos)

    @property
    def remaining(self) -> str:
        """Unread remainder of the input."""
        return self._text(self._pos, self._source_len)

    def location(self) -> SourceLocation:
        """Line and column of the cursor."""
        return SourceLocation.from_offset(self._source, self._pos, self.name)

    def _text(self, start: int, end: int) -> str:
        """Implemented by Lexer (decodes bytes input)."""
        raise NotImplementedError

    # =========================================================================
    # Primitives
    # =========================================================================

    def read(self) -> str:
        """Consume and return the next character.

        Returns:
            The character, or EOF ("") at end of input with width 0.
        """
        self._can_backtrack = True
        if self._pos >= self._source_len:
            self._width = 0
            return EOF
        if self._is_bytes:
            char, self._width = decode_rune(self._source, self._pos)  # type: ignore[arg-type]
        else:
            char = self._source[self._pos]  # type: ignore[assignment]
            self._width = 1
        self._pos += self._width
        return char

    def backtrack(self) -> None:
        """Undo the most recent read.

        Valid once per read. A second call without an intervening read is
        ignored, or raises CursorError when strict_backtrack is configured.
        """
        if not self._can_backtrack:
            if self._strict_backtrack:
                raise CursorError(
                    f"{self.name}: backtrack at offset {self._pos} without a preceding read"
                )
            return
        self._pos -= self._width
        self._width = 0
        self._can_backtrack = False

    def peek(self) -> str:
        """Return the next character without consuming it."""
        char = self.read()
        self.backtrack()
        return char

    def accept(self, valid: Container[str]) -> bool:
        """Consume the next character if it is in valid.

        Args:
            valid: A string or set of acceptable characters. EOF never matches.

        Returns:
            True if a character was consumed.
        """
        char = self.read()
        if char and char in valid:
            return True
        self.backtrack()
        return False

    def accept_run(self, valid: Container[str]) -> int:
        """Consume characters while they are in valid.

        Returns:
            Number of characters consumed.
        """
        count = 0
        while self.accept(valid):
            count += 1
        return count

    def ignore(self) -> None:
        """Drop the pending region without emitting it.

        The last read can no longer be backtracked, so the cursor never
        moves behind start.
        """
        self._start = self._pos
        self._width = 0
        self._can_backtrack = False

    def has_prefix(self, literal: str) -> bool:
        """Check whether the unread input starts with literal, without consuming."""
        if self._is_bytes:
            return self._source.startswith(literal.encode("utf-8"), self._pos)  # type: ignore[arg-type]
        return self._source.startswith(literal, self._pos)  # type: ignore[arg-type]

    def accept_literal(self, literal: str) -> bool:
        """Consume literal if the unread input starts with it.

        The consumed literal cannot be undone with backtrack.

        Returns:
            True if literal was consumed.
        """
        if not self.has_prefix(literal):
            return False
        size = len(literal.encode("utf-8")) if self._is_bytes else len(literal)
        self._pos += size
        self._width = 0
        self._can_backtrack = False
        return True
