"""Utility modules for runelex.

Provides:
- logger: get_logger for module loggers, scan_log for per-scan records
"""

from runelex.utils.logger import ScanLogAdapter, get_logger, scan_log

__all__ = [
    "ScanLogAdapter",
    "get_logger",
    "scan_log",
]
