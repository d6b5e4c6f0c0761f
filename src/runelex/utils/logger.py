"""Logging utilities for runelex.

Module loggers live under the "runelex." namespace. Records written on
behalf of one scan go through a ScanLogAdapter, which prefixes the
message with the scan's name and attaches it as ``record.scan`` so
handlers can filter or format by input.

Example:
    >>> from runelex.utils.logger import get_logger, scan_log
    >>> logger = get_logger(__name__)
    >>> scan_log(logger, "page.html").debug("worker finished")
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "runelex." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'runelex.mymodule'
    """
    if not (name == "runelex" or name.startswith("runelex.")):
        name = f"runelex.{name}"
    return logging.getLogger(name)


class ScanLogAdapter(logging.LoggerAdapter):
    """Tags every record with the name of the scan that produced it."""

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        scan = self.extra["scan"] if self.extra else "?"
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("scan", scan)
        kwargs["extra"] = extra
        return f"{scan}: {msg}", kwargs


def scan_log(logger: logging.Logger, scan: str) -> ScanLogAdapter:
    """Wrap logger so its records name the scan."""
    return ScanLogAdapter(logger, {"scan": scan})
