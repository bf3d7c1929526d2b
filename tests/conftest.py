from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Capture dungeonforge debug output so every log line is formatted in tests."""
    caplog.set_level(logging.DEBUG, logger="dungeonforge")
