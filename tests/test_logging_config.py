"""Tests for csgpoints.logging_config."""

import logging

import pytest

from csgpoints.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("csgpoints")
    saved = (logger.level, list(logger.handlers))
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]


class TestSetupLogging:
    def test_console_handler_and_level(self, package_logger):
        setup_logging(logging.WARNING)
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1

    def test_repeated_calls_do_not_stack(self, package_logger):
        setup_logging()
        setup_logging()
        assert len(package_logger.handlers) == 1

    def test_reconfiguring_closes_previous_file(self, package_logger, tmp_path):
        setup_logging(logging.INFO, str(tmp_path / "first.log"))
        first = next(h for h in package_logger.handlers
                     if isinstance(h, logging.FileHandler))
        setup_logging(logging.INFO, str(tmp_path / "second.log"))
        assert first not in package_logger.handlers
        assert first.stream is None
        assert len(package_logger.handlers) == 2

    def test_file_handler_receives_module_records(self, package_logger, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(logging.DEBUG, str(log_file))
        assert len(package_logger.handlers) == 2
        logging.getLogger("csgpoints.pipeline").info("kept %d point(s)", 12)
        for handler in package_logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "csgpoints.pipeline - INFO - kept 12 point(s)" in text
        assert "Logging initialized." in text
