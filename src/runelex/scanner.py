"""Consumption facade: the pull and push protocols.

The protocol is fixed by the class a caller constructs, so one instance
can never be driven both ways:

- PullScanner: no background task. Each ``next_token()`` first takes a
  queued token if there is one; otherwise it runs the grammar for exactly
  one transition and tries again.
- PushScanner: ``start()`` runs the grammar on a worker thread writing
  into a bounded channel, and ``listen()`` blocks for the next token.
  ``run_sync()`` instead runs the whole grammar in the calling thread
  before any token is consumed.

Both return ``(token, done)`` pairs where ``done`` is true exactly for
the terminal token, and both iterate over every token including the
terminal one. For the same grammar and input they yield the same
ordered sequence; only the delivery timing differs.

Example:
    >>> scanner = PullScanner("page", "<div>{{name}}</div>", lex_text)
    >>> [str(tok) for tok in scanner]
    ['<div>', '{{', 'name', '}}', '</div>', 'EOF']

"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from types import TracebackType
from typing import Literal

from runelex.channel import BoundedChannel, BufferedChannel
from runelex.config import ScanConfig, get_scan_config
from runelex.errors import ProtocolError, ScanError
from runelex.lexer.core import Lexer, ScanAction
from runelex.location import SourceLocation
from runelex.tokens import AnyToken, ErrorToken, is_terminal
from runelex.utils.logger import get_logger, scan_log

logger = get_logger(__name__)


class _Scanner:
    """State shared by both protocols."""

    def __init__(
        self,
        name: str,
        source: str | bytes,
        initial_action: ScanAction,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        self._config = config if config is not None else get_scan_config()
        self._lexer = Lexer(name, source, initial_action, config=self._config)
        self._finished = False
        self._log = scan_log(logger, name)

    @property
    def name(self) -> str:
        return self._lexer.name

    @property
    def lexer(self) -> Lexer:
        return self._lexer

    @property
    def finished(self) -> bool:
        """True once the terminal token was handed to the consumer or discarded on exit."""
        return self._finished

    def _deliver(self, token: AnyToken | None) -> tuple[AnyToken, bool]:
        if token is None:
            # Closed and drained with no failure: the terminal token was
            # already taken by a previous call.
            raise ProtocolError(f"{self.name}: token stream is closed")
        done = is_terminal(token)
        if done:
            self._finished = True
        return token, done

    def _check_open(self) -> None:
        if self._finished:
            raise ProtocolError(f"{self.name}: terminal token already delivered")

    def _next(self) -> tuple[AnyToken, bool]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[AnyToken]:
        """Yield every remaining token, the terminal token last."""
        while not self._finished:
            token, _ = self._next()
            yield token


class PullScanner(_Scanner):
    """Inline, caller-driven scanning with no background task.

    Tokens queue in an unbounded buffer, so a scanning action may emit
    any number of tokens in one transition.

    """

    def next_token(self) -> tuple[AnyToken, bool]:
        """Advance the grammar until a token is available and return it.

        Returns:
            (token, done) where done is True for the terminal token.

        Raises:
            ProtocolError: The terminal token was already delivered.
            Exception: Whatever a scanning action raised.
        """
        self._check_open()
        channel = self._lexer.channel
        while True:
            token = channel.try_receive()
            if token is not None:
                return self._deliver(token)
            if self._lexer.done:
                return self._deliver(channel.receive())
            self._lexer.step()

    _next = next_token


class PushScanner(_Scanner):
    """Producer/consumer scanning: the grammar runs apart from the consumer.

    Use as a context manager to start the worker and join it on exit.
    Tokens left undelivered when the block exits early are discarded:

        with PushScanner("page", source, lex_text) as scanner:
            for token in scanner:
                ...

    """

    def __init__(
        self,
        name: str,
        source: str | bytes,
        initial_action: ScanAction,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        super().__init__(name, source, initial_action, config=config)
        self._started = False
        self._thread: threading.Thread | None = None

    @property
    def started(self) -> bool:
        return self._started

    def _claim_start(self) -> None:
        if self._started:
            raise ProtocolError(f"{self.name}: scanner already started")
        self._started = True

    def start(self) -> PushScanner:
        """Run the grammar on a worker thread feeding a bounded channel.

        Returns:
            self, for chaining.
        """
        self._claim_start()
        capacity = self._config.channel_capacity(len(self._lexer.source))
        self._lexer.use_channel(BoundedChannel(capacity))
        self._thread = threading.Thread(
            target=self._work,
            name=f"runelex-{self.name}",
            daemon=self._config.daemon,
        )
        self._log.debug("starting worker (channel capacity %d)", capacity)
        self._thread.start()
        return self

    def run_sync(self) -> PushScanner:
        """Run the grammar to completion in the calling thread.

        Every token is buffered before this returns; ``listen()`` then
        never blocks.

        Returns:
            self, for chaining.

        Raises:
            Exception: Whatever a scanning action raised. The same failure
                is raised again by ``listen()`` after the tokens sent
                before it.
        """
        self._claim_start()
        self._lexer.use_channel(BufferedChannel())
        self._lexer.run()
        return self

    def _work(self) -> None:
        try:
            self._lexer.run()
        except Exception:
            # Already recorded on the channel; listen() re-raises it
            self._log.debug("worker stopped by a failing action")
            return
        self._log.debug("worker finished after %d transitions", self._lexer.transitions)

    def listen(self) -> tuple[AnyToken, bool]:
        """Block until the next token arrives and return it.

        Returns:
            (token, done) where done is True for the terminal token.

        Raises:
            ProtocolError: The scanner was not started, or the terminal
                token was already delivered.
            Exception: Whatever a scanning action raised, once the tokens
                sent before the failure are drained.
        """
        if not self._started:
            raise ProtocolError(f"{self.name}: listen() called before start()")
        self._check_open()
        return self._deliver(self._lexer.channel.receive())

    _next = listen

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread, if any, to finish."""
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> PushScanner:
        if not self._started:
            self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # A worker blocked on a full channel only finishes once it is drained
        if self._started and not self._finished:
            self._discard_remaining()
        if exc_type is None:
            self.join()

    def _discard_remaining(self) -> None:
        channel = self._lexer.channel
        try:
            while channel.receive() is not None:
                pass
        except Exception:
            self._log.debug("failure discarded with the undelivered tokens")
        self._finished = True


def tokenize(
    source: str | bytes,
    initial_action: ScanAction,
    *,
    name: str = "input",
    mode: Literal["pull", "push", "sync"] = "pull",
    raise_on_error: bool = False,
    config: ScanConfig | None = None,
) -> list[AnyToken]:
    """Scan source to completion and collect the tokens.

    Args:
        source: Input text, or UTF-8 encoded bytes
        initial_action: First scanning action of the grammar
        name: Diagnostic name
        mode: "pull" (PullScanner), "push" (PushScanner.start) or
            "sync" (PushScanner.run_sync)
        raise_on_error: Raise ScanError instead of returning a list that
            ends with an ErrorToken
        config: Overrides the context's ScanConfig

    Returns:
        Every token of the run, the terminal token last.

    Raises:
        ScanError: raise_on_error is set and the grammar signalled an error.
    """
    scanner: PullScanner | PushScanner
    if mode == "pull":
        scanner = PullScanner(name, source, initial_action, config=config)
        tokens = list(scanner)
    elif mode in ("push", "sync"):
        scanner = PushScanner(name, source, initial_action, config=config)
        if mode == "push":
            scanner.start()
        else:
            scanner.run_sync()
        tokens = list(scanner)
        scanner.join()
    else:
        raise ValueError(f"unknown scan mode {mode!r}")

    last = tokens[-1]
    if raise_on_error and isinstance(last, ErrorToken):
        loc = SourceLocation.from_offset(source, last.offset, name)
        raise ScanError(last.message, loc.lineno, loc.col_offset, name)
    return tokens


__all__ = ["PullScanner", "PushScanner", "tokenize"]
