"""Tests for the logging helper."""

import logging

from logger import get_logger, reset_logger


class TestGetLogger:
    def test_cached(self):
        a = get_logger("drill-test-cache")
        b = get_logger("drill-test-cache")
        assert a is b
        reset_logger("drill-test-cache")

    def test_single_handler(self):
        logger = get_logger("drill-test-handler")
        get_logger("drill-test-handler")
        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO
        assert logger.propagate is False
        reset_logger("drill-test-handler")

    def test_reset_removes_handlers(self):
        logger = get_logger("drill-test-reset")
        reset_logger("drill-test-reset")
        assert logger.handlers == []
