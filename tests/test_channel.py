"""Tests for the delivery channels."""

import threading

import pytest

from runelex import BoundedChannel, BufferedChannel, EndOfStream, ProtocolError, Token


def tok(value: str) -> Token:
    return Token("T", value, 0, len(value))


class TestBufferedChannel:
    def test_fifo(self) -> None:
        channel = BufferedChannel()
        channel.send(tok("a"))
        channel.send(tok("b"))
        assert channel.try_receive() == tok("a")
        assert channel.receive() == tok("b")

    def test_try_receive_empty(self) -> None:
        assert BufferedChannel().try_receive() is None

    def test_receive_on_open_empty_channel(self) -> None:
        with pytest.raises(ProtocolError):
            BufferedChannel().receive()

    def test_closed_and_drained(self) -> None:
        channel = BufferedChannel()
        channel.send(EndOfStream(0))
        channel.close()
        assert channel.receive() == EndOfStream(0)
        assert channel.receive() is None

    def test_send_after_close(self) -> None:
        channel = BufferedChannel()
        channel.close()
        with pytest.raises(ProtocolError):
            channel.send(tok("late"))

    def test_failure_after_drain(self) -> None:
        channel = BufferedChannel()
        channel.send(tok("a"))
        channel.close(failure=OSError("disk"))
        assert channel.try_receive() == tok("a")
        with pytest.raises(OSError):
            channel.try_receive()

    def test_close_is_idempotent(self) -> None:
        channel = BufferedChannel()
        channel.close(failure=OSError("first"))
        channel.close()
        with pytest.raises(OSError, match="first"):
            channel.receive()


class TestBoundedChannel:
    def test_fifo_and_close(self) -> None:
        channel = BoundedChannel(4)
        channel.send(tok("a"))
        channel.send(EndOfStream(1))
        channel.close()
        assert channel.receive() == tok("a")
        assert channel.receive() == EndOfStream(1)
        assert channel.receive() is None
        assert channel.receive() is None

    def test_try_receive_empty(self) -> None:
        assert BoundedChannel(1).try_receive() is None

    def test_try_receive_after_close(self) -> None:
        channel = BoundedChannel(1)
        channel.close()
        assert channel.try_receive() is None
        assert channel.receive() is None

    def test_receive_blocks_until_send(self) -> None:
        channel = BoundedChannel(1)
        received: list[Token | None] = []
        consumer = threading.Thread(target=lambda: received.append(channel.receive()))
        consumer.start()
        channel.send(tok("late"))
        consumer.join(timeout=5)
        assert received == [tok("late")]

    def test_full_channel_blocks_sender(self) -> None:
        channel = BoundedChannel(1)
        channel.send(tok("a"))
        sent = threading.Event()

        def produce() -> None:
            channel.send(tok("b"))
            sent.set()

        producer = threading.Thread(target=produce)
        producer.start()
        assert not sent.wait(0.1)
        assert channel.receive() == tok("a")
        assert sent.wait(5)
        assert channel.receive() == tok("b")
        producer.join(timeout=5)

    def test_failure_raised_after_drain(self) -> None:
        channel = BoundedChannel(2)
        channel.send(tok("a"))
        channel.close(failure=ValueError("bad"))
        assert channel.receive() == tok("a")
        with pytest.raises(ValueError):
            channel.receive()
        with pytest.raises(ValueError):
            channel.receive()
