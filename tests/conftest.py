"""Shared fixtures for the runelex test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from runelex import reset_scan_config

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def plaintext() -> str:
    """Multi-line template text with unicode and stray delimiters."""
    return (FIXTURES / "plaintext").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _reset_config():
    """Keep ContextVar config from leaking between tests."""
    yield
    reset_scan_config()
