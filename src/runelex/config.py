"""ContextVar-based scan configuration for runelex.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Lexer captures the active config once, at construction, so a push-mode
worker thread sees the same config as the thread that built the scanner.

Usage:
    from runelex.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(strict_backtrack=True)):
        scanner = PullScanner("input", source, lex_text)

    # Or per scanner, overriding the context
    scanner = PushScanner("input", source, lex_text, config=ScanConfig(capacity=64))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        capacity: Fixed capacity of the push-mode channel. None sizes it
            from the input length.
        capacity_ratio: Channel capacity per unit of input when capacity
            is None.
        min_capacity: Lower bound for the computed channel capacity.
        strict_backtrack: Raise CursorError on a second backtrack without
            an intervening read instead of ignoring it.
        daemon: Run push-mode workers as daemon threads.
        encoding_errors: Error handler used to decode token values from
            ``bytes`` input.

    """

    capacity: int | None = None
    capacity_ratio: float = 0.5
    min_capacity: int = 2
    strict_backtrack: bool = False
    daemon: bool = True
    encoding_errors: str = "replace"

    def channel_capacity(self, source_len: int) -> int:
        """Capacity of the bounded channel for an input of source_len units."""
        if self.capacity is not None:
            return max(1, self.capacity)
        return max(self.min_capacity, 1, int(source_len * self.capacity_ratio))

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values.

        Returns:
            New ScanConfig instance with values from dict.

        Example:
            >>> config = ScanConfig.from_dict({"capacity": 8, "unknown": 1})
            >>> config.capacity
            8

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (context-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: ScanConfig to use within the context.

    Yields:
        None

    Example:
        >>> with scan_config_context(ScanConfig(min_capacity=16)):
        ...     get_scan_config().min_capacity
        16

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
]
