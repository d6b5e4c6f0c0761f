"""State-function lexer engine.

A grammar is a graph of scanning actions. Each action receives the
Lexer, reads characters through the cursor primitives, emits zero or
more tokens, and returns the next action, or None to stop:

    def lex_text(lexer: Lexer) -> ScanAction | None:
        while not lexer.has_prefix("{{"):
            if lexer.read() == EOF:
                lexer.emit_if_pending(Tok.TEXT)
                return lexer.emit_eof()
        lexer.emit_if_pending(Tok.TEXT)
        return lex_open_block

The runner invokes the active action until it returns None, then closes
the delivery channel. Exactly one terminal token (EndOfStream or
ErrorToken) is always the last token sent: if a grammar stops without
sending one, the runner sends EndOfStream itself.

Thread Safety:
Lexer instances are single-use. Create one per source string.
Whichever thread drives the runner owns all cursor state; consumers
only ever see finished tokens through the channel.

"""

from __future__ import annotations

from typing import Protocol

from runelex.channel import BufferedChannel, TokenChannel
from runelex.config import ScanConfig, get_scan_config
from runelex.errors import ProtocolError
from runelex.lexer.cursor import CursorMixin
from runelex.lexer.emit import EmitterMixin
from runelex.profiling import ScanAccumulator, get_scan_accumulator
from runelex.tokens import AnyToken, EndOfStream, ErrorToken, is_terminal
from runelex.utils.logger import get_logger, scan_log

logger = get_logger(__name__)


class ScanAction(Protocol):
    """A scanning action: consumes input, returns the next action or None."""

    def __call__(self, lexer: Lexer, /) -> ScanAction | None: ...


class Lexer(
    # Cursor primitives (read, backtrack, peek, accept, ...)
    CursorMixin,
    # Emission primitives (emit, emit_if_pending, emit_eof, errorf)
    EmitterMixin,
):
    """Engine instance: input, scan state, current action and channel.

    Usage:
            >>> lexer = Lexer("input", "abc", lex_text)
            >>> lexer.run()
            >>> lexer.channel.receive()
        Token(TEXT, 'abc', 0:3)

    """

    __slots__ = (
        "name",
        "_source",
        "_source_len",  # Cached len(source)
        "_is_bytes",
        "_start",
        "_pos",
        "_width",
        "_can_backtrack",
        "_strict_backtrack",
        "_encoding_errors",
        "_initial_action",
        "_action",
        "_channel",
        "_config",
        "_accumulator",
        "_terminal_sent",
        "_error_sent",
        "_tokens_sent",
        "_transitions",
        "_log",
    )

    def __init__(
        self,
        name: str,
        source: str | bytes,
        initial_action: ScanAction,
        *,
        channel: TokenChannel | None = None,
        config: ScanConfig | None = None,
    ) -> None:
        """Initialize lexer with source text and the grammar's first action.

        Args:
            name: Diagnostic name used in logs and error locations
            source: Input text, or UTF-8 encoded bytes
            initial_action: First scanning action of the grammar
            channel: Delivery channel (defaults to a BufferedChannel)
            config: Overrides the context's ScanConfig
        """
        if config is None:
            config = get_scan_config()
        self.name = name
        self._source = source
        self._source_len = len(source)
        self._is_bytes = isinstance(source, (bytes, bytearray))
        self._start = 0
        self._pos = 0
        self._width = 0
        self._can_backtrack = False
        self._strict_backtrack = config.strict_backtrack
        self._encoding_errors = config.encoding_errors
        self._initial_action = initial_action
        self._action: ScanAction | None = initial_action
        self._channel: TokenChannel = channel if channel is not None else BufferedChannel()
        self._config = config
        self._accumulator: ScanAccumulator | None = get_scan_accumulator()
        self._log = scan_log(logger, name)

        # Run bookkeeping
        self._terminal_sent = False
        self._error_sent = False
        self._tokens_sent = 0
        self._transitions = 0

    def __repr__(self) -> str:
        return f"<Lexer {self.name!r} at {self._start}:{self._pos}/{self._source_len}>"

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def channel(self) -> TokenChannel:
        return self._channel

    @property
    def initial_action(self) -> ScanAction:
        return self._initial_action

    @property
    def action(self) -> ScanAction | None:
        """The active scanning action, or None once the run is Terminal."""
        return self._action

    @property
    def done(self) -> bool:
        return self._action is None

    @property
    def transitions(self) -> int:
        """Number of scanning actions invoked so far."""
        return self._transitions

    def use_channel(self, channel: TokenChannel) -> None:
        """Replace the delivery channel before the first transition.

        Raises:
            ProtocolError: The runner has already started.
        """
        if self._transitions or self._tokens_sent or self._action is None:
            raise ProtocolError(f"{self.name}: channel cannot change once the runner started")
        self._channel = channel

    # =========================================================================
    # Runner
    # =========================================================================

    def step(self) -> bool:
        """Invoke the active action once and adopt its return value.

        Returns:
            True while the run is still Active, False once it is Terminal.

        Raises:
            Exception: Whatever the scanning action raised. The channel is
                closed with the same failure before it propagates.
        """
        action = self._action
        if action is None:
            return False
        try:
            next_action = action(self)
        except Exception as exc:
            self._action = None
            self._log.debug("scanning action %r failed", action, exc_info=True)
            self._channel.close(failure=exc)
            self._record_run()
            raise
        self._transitions += 1

        # A terminal token ends the run whatever the action returned
        if self._terminal_sent:
            next_action = None

        self._action = next_action
        if next_action is None:
            self._finish()
            return False
        return True

    def run(self) -> None:
        """Drive the runner until it reaches Terminal."""
        while self.step():
            pass

    def _finish(self) -> None:
        if not self._terminal_sent:
            self._log.debug("grammar stopped without a terminal token, sending EndOfStream")
            self._send(EndOfStream(self._pos))
        self._channel.close()
        self._record_run()

    def _record_run(self) -> None:
        if self._accumulator is not None:
            self._accumulator.record_run(
                source_length=self._source_len,
                transitions=self._transitions,
                tokens=self._tokens_sent,
                errors=int(self._error_sent),
            )

    # =========================================================================
    # Channel plumbing
    # =========================================================================

    def _send(self, token: AnyToken) -> None:
        if self._terminal_sent:
            raise ProtocolError(f"{self.name}: {token!r} emitted after the terminal token")
        if is_terminal(token):
            self._terminal_sent = True
            self._error_sent = isinstance(token, ErrorToken)
        self._tokens_sent += 1
        self._channel.send(token)

    def _text(self, start: int, end: int) -> str:
        if self._is_bytes:
            return bytes(self._source[start:end]).decode("utf-8", self._encoding_errors)
        return self._source[start:end]  # type: ignore[return-value]
