"""runelex ScanAccumulator: opt-in profiling for scan runs.

This module provides accumulated metrics across scan runs:
- Total profiling time
- Runs completed, runner transitions and tokens delivered
- Error tokens and source length

Zero overhead when disabled (get_scan_accumulator() returns None).
A Lexer captures the accumulator at construction, so push-mode runs on
worker threads are still recorded.

Example:
    from runelex import tokenize
    from runelex.profiling import profiled_scan

    with profiled_scan() as metrics:
        tokenize(source, lex_text)

    print(metrics.summary())
    # {"total_ms": 0.4, "runs": 1, "transitions": 7, "tokens": 6, ...}

"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics across scan runs.

    Attributes:
        start_time: Profiling start timestamp.
        runs: Number of runs that reached Terminal.
        transitions: Number of scanning actions invoked.
        tokens: Number of tokens sent, terminal tokens included.
        errors: Number of error tokens sent.
        source_length: Total length of the scanned inputs.

    """

    start_time: float = field(default_factory=perf_counter)
    runs: int = 0
    transitions: int = 0
    tokens: int = 0
    errors: int = 0
    source_length: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record_run(
        self, *, source_length: int, transitions: int, tokens: int, errors: int
    ) -> None:
        """Record a completed run.

        Args:
            source_length: Length of the input scanned.
            transitions: Scanning actions invoked during the run.
            tokens: Tokens sent during the run.
            errors: Error tokens sent during the run (0 or 1).

        """
        with self._lock:
            self.runs += 1
            self.source_length += source_length
            self.transitions += transitions
            self.tokens += tokens
            self.errors += errors

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics.

        Returns:
            Dict with total_ms, runs, transitions, tokens, errors, source_length.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "runs": self.runs,
            "transitions": self.transitions,
            "tokens": self.tokens,
            "errors": self.errors,
            "source_length": self.source_length,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator populated by lexers constructed inside the block.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
