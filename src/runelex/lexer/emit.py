"""Emission mixin: packaging the pending region into tokens."""

from __future__ import annotations

from collections.abc import Hashable, Mapping

from runelex.tokens import AnyToken, EndOfStream, ErrorToken, Token


class EmitterMixin:
    """Mixin providing the emission primitives used by scanning actions.

    Every emission goes through ``_send``, which the Lexer implements on
    top of its delivery channel.

    """

    # These will be set by the Lexer class
    _start: int
    _pos: int
    _width: int
    _can_backtrack: bool

    def _send(self, token: AnyToken) -> None:
        """Deliver token to the channel. Implemented by Lexer."""
        raise NotImplementedError

    def _text(self, start: int, end: int) -> str:
        """Implemented by Lexer (decodes bytes input)."""
        raise NotImplementedError

    def emit(self, token_type: Hashable) -> Token:
        """Send the pending region as a token of token_type.

        The pending region is cleared afterwards and the last read can no
        longer be backtracked. Emitting an empty region is allowed; use
        emit_if_pending to skip it.

        Returns:
            The token that was sent.
        """
        token = Token(token_type, self._text(self._start, self._pos), self._start, self._pos)
        self._send(token)
        self._start = self._pos
        self._width = 0
        self._can_backtrack = False
        return token

    def emit_if_pending(self, token_type: Hashable) -> bool:
        """Emit only when the pending region is not empty.

        Returns:
            True if a token was sent.
        """
        if self._pos > self._start:
            self.emit(token_type)
            return True
        return False

    def emit_eof(self) -> None:
        """Send the EndOfStream terminal token.

        Returns None so a scanning action can end with
        ``return lexer.emit_eof()``.
        """
        self._send(EndOfStream(self._pos))
        return None

    def errorf(self, fmt: str, *args: object) -> None:
        """Send an ErrorToken and stop the run.

        The message is ``fmt % args`` (or fmt unchanged when there are no
        args). A single mapping argument fills named fields, as in
        ``errorf("bad %(char)r", {"char": c})``. Returns None so a
        scanning action can end with
        ``return lexer.errorf("unclosed block at %d", lexer.current)``.
        """
        if not args:
            message = fmt
        elif len(args) == 1 and isinstance(args[0], Mapping):
            message = fmt % args[0]
        else:
            message = fmt % args
        self._send(ErrorToken(message, self._pos))
        return None
