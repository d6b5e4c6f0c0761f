"""Delivery channels carrying tokens from the runner to the consumer.

Two implementations share the TokenChannel protocol:

- BufferedChannel: an unbounded deque for runs where the producer and
  the consumer are the same thread (pull mode, run_sync). Nothing ever
  blocks.
- BoundedChannel: a ``queue.Queue`` of fixed capacity for background
  runs. A full channel blocks the producer's next send, so a slow
  consumer applies backpressure and no token is ever dropped.

A channel is closed exactly once, by the runner, after the terminal token
or after a scanning action raised. A failure passed to ``close`` is
re-raised to the consumer once the queued tokens are drained.

"""

from __future__ import annotations

import queue
from collections import deque
from typing import Protocol

from runelex.errors import ProtocolError
from runelex.tokens import AnyToken

# Queued by BoundedChannel.close() behind the last token
_CLOSED = object()


class TokenChannel(Protocol):
    """Interface shared by the delivery channels."""

    @property
    def closed(self) -> bool: ...

    def send(self, token: AnyToken) -> None: ...

    def try_receive(self) -> AnyToken | None: ...

    def receive(self) -> AnyToken | None: ...

    def close(self, failure: BaseException | None = None) -> None: ...


class BufferedChannel:
    """Unbounded single-thread channel."""

    __slots__ = ("_items", "_closed", "_failure")

    def __init__(self) -> None:
        self._items: deque[AnyToken] = deque()
        self._closed = False
        self._failure: BaseException | None = None

    def __len__(self) -> int:
        return len(self._items)

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, token: AnyToken) -> None:
        if self._closed:
            raise ProtocolError("send on closed channel")
        self._items.append(token)

    def try_receive(self) -> AnyToken | None:
        """Pop the next token, or None if nothing is queued."""
        if self._items:
            return self._items.popleft()
        if self._closed and self._failure is not None:
            raise self._failure
        return None

    def receive(self) -> AnyToken | None:
        """Pop the next token, or None once closed and drained.

        Raises:
            ProtocolError: The channel is empty but still open; waiting
                would never return since no other thread produces.
        """
        if self._items:
            return self._items.popleft()
        if self._closed:
            if self._failure is not None:
                raise self._failure
            return None
        raise ProtocolError("receive on an empty channel that no runner is filling")

    def close(self, failure: BaseException | None = None) -> None:
        if self._closed:
            return
        self._failure = failure
        self._closed = True


class BoundedChannel:
    """Thread-safe blocking channel of fixed capacity."""

    __slots__ = ("_queue", "_closed", "_drained", "_failure", "capacity")

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._closed = False
        self._drained = False
        self._failure: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, token: AnyToken) -> None:
        """Queue token, blocking while the channel is full."""
        if self._closed:
            raise ProtocolError("send on closed channel")
        self._queue.put(token)

    def _unwrap(self, item: object) -> AnyToken | None:
        if item is _CLOSED:
            self._drained = True
            if self._failure is not None:
                raise self._failure
            return None
        return item  # type: ignore[return-value]

    def try_receive(self) -> AnyToken | None:
        """Pop the next token without blocking, or None if nothing is queued."""
        if self._drained:
            return self._unwrap(_CLOSED)
        try:
            item = self._queue.get_nowait()
        except queue.Empty:
            return None
        return self._unwrap(item)

    def receive(self) -> AnyToken | None:
        """Block for the next token. Returns None once closed and drained."""
        if self._drained:
            return self._unwrap(_CLOSED)
        return self._unwrap(self._queue.get())

    def close(self, failure: BaseException | None = None) -> None:
        """Mark the end of the stream behind the queued tokens."""
        if self._closed:
            return
        self._failure = failure
        self._closed = True
        self._queue.put(_CLOSED)


__all__ = ["BoundedChannel", "BufferedChannel", "TokenChannel"]
