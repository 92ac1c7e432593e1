"""
Root conftest.py — registers custom markers.

Markers:
  @pytest.mark.tty   — needs a pseudo-terminal (os.openpty); skipped where unavailable
"""
from __future__ import annotations

import os

import pytest


# ---------------------------------------------------------------------------
# Custom markers
# ---------------------------------------------------------------------------

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "tty: mark test as driving a real pseudo-terminal (POSIX only)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip @pytest.mark.tty tests on platforms without pseudo-terminals."""
    if hasattr(os, "openpty"):
        return
    skip_tty = pytest.mark.skip(reason="Pseudo-terminals are not available on this platform")
    for item in items:
        if "tty" in item.keywords:
            item.add_marker(skip_tty)
