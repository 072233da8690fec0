"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from lemonade_dev.core.observability.logging_config import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo ``setup_logging`` calls made by CLI invocations.

    A configured package logger stops propagating, which would hide its
    records from ``caplog`` in later tests.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that creates files under a temp project directory.

    Usage: ``make_project("routes/+page.tsx", "components/A.island.tsx")``
    """

    def _make(*files: str) -> Path:
        for rel in files:
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("export default function () {}\n")
        return tmp_path

    return _make


class CountingFormatter:
    """Identity formatter that records every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        return text


@pytest.fixture
def counting_formatter() -> CountingFormatter:
    return CountingFormatter()
