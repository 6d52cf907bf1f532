"""Shared test fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_pathux_logger():
    """Undo any logging setup a test (usually a CLI run) performed."""
    yield
    logger = logging.getLogger("pathux")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
