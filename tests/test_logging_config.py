"""
Tests for logging setup.
"""

import logging

import pytest

from users_api.app.core.config import Settings
from users_api.app.core.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_levels():
    """Put the touched logger levels back after each test."""
    loggers = [logging.getLogger(), logging.getLogger("uvicorn"), logging.getLogger("uvicorn.access")]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_levels_follow_settings(self):
        """Test that root and uvicorn loggers use the configured level."""
        setup_logging(Settings(log_level="debug", debug=False))

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("uvicorn").level == logging.DEBUG

    def test_access_log_quiet_outside_debug(self):
        """Test that request lines are hidden unless debug is on."""
        setup_logging(Settings(log_level="INFO", debug=False))

        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_access_log_in_debug(self):
        """Test that debug mode shows request lines."""
        setup_logging(Settings(log_level="INFO", debug=True))

        assert logging.getLogger("uvicorn.access").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        """Test an unrecognised level name."""
        setup_logging(Settings(log_level="verbose", debug=False))

        assert logging.getLogger().level == logging.INFO
