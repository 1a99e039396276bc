"""Pytest configuration and fixtures."""

import logging

import pytest

from testarossa.config import configure
from testarossa.handles import RecordingT


@pytest.fixture(autouse=True)
def reset_settings():
    """Every test starts from default settings."""
    configure(None)
    yield
    configure(None)


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers added to testarossa loggers during a test."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("testarossa"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def mt():
    """A recording handle that collects failures instead of reporting them."""
    return RecordingT()
