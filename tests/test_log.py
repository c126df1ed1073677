"""Tests for logging setup"""

import logging

import pytest

from visatrack.lib import log as log_module
from visatrack.lib.log import setup_logging


@pytest.fixture
def visatrack_logger(monkeypatch):
    logger = logging.getLogger("visatrack")
    handlers, level = list(logger.handlers), logger.level
    monkeypatch.setattr(log_module, "get_log_file", lambda: None)
    monkeypatch.setattr(log_module, "get_log_level", lambda: "WARNING")
    monkeypatch.setattr(logger, "_visatrack_configured", False, raising=False)
    yield logger
    for handler in logger.handlers[len(handlers):]:
        logger.removeHandler(handler)
    logger.setLevel(level)


class TestSetupLogging:
    def test_explicit_level(self, visatrack_logger):
        assert setup_logging("debug").level == logging.DEBUG

    def test_level_from_config(self, visatrack_logger):
        assert setup_logging().level == logging.WARNING

    def test_unknown_level_falls_back(self, visatrack_logger, caplog):
        logger = setup_logging("VERBOSE")

        assert logger.level == logging.WARNING
        assert "unknown log level 'VERBOSE'" in caplog.text

    def test_handlers_added_once(self, visatrack_logger):
        before = len(visatrack_logger.handlers)
        setup_logging("INFO")
        setup_logging("INFO")

        assert len(visatrack_logger.handlers) == before + 1
