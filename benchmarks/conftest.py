"""Benchmark fixtures and configuration."""

from __future__ import annotations

import pytest


@pytest.fixture
def large_template() -> str:
    """Generate a large template document (~100KB)."""
    sections = []
    for i in range(1500):
        sections.append(
            f"<section id=\"s{i}\">\n  <h1>{{{{ title_{i} }}}}</h1>\n"
            f"  <p>Paragraph {i} by {{{{author}}}}.</p>\n</section>\n"
        )
    return "".join(sections)
