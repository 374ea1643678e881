"""Tests for logging utilities."""

import logging

from rich.logging import RichHandler

from common.logger import get_logger, progress


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger_instance(self):
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)

    def test_logger_name(self):
        """Test that logger has correct name."""
        logger = get_logger("test.module")
        assert logger.name == "test.module"

    def test_default_level_is_info(self, monkeypatch):
        """Test that default logging level is INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("test.default")
        assert logger.level == logging.INFO

    def test_level_from_env(self, monkeypatch):
        """Test that LOG_LEVEL sets the level of new loggers."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = get_logger("test.env_level")
        assert logger.level == logging.WARNING

    def test_custom_level(self):
        """Test that custom logging level can be set."""
        logger = get_logger("test.custom", level="debug")
        assert logger.level == logging.DEBUG

    def test_logger_has_rich_handler(self):
        """Test that logger is configured with a rich handler."""
        logger = get_logger("test.handler")
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_reuses_existing_logger(self):
        """Test that get_logger does not stack handlers."""
        logger1 = get_logger("test.reuse")
        logger2 = get_logger("test.reuse")
        assert logger1 is logger2
        assert len(logger2.handlers) == 1

    def test_logging_output(self, caplog):
        """Test that records propagate to caplog."""
        logger = get_logger("test.output")

        with caplog.at_level(logging.INFO):
            logger.info("Test message")

        assert "Test message" in caplog.text

    def test_info_level_filters_debug(self, caplog):
        """Test that INFO level filters out DEBUG messages."""
        logger = get_logger("test.filter", level="INFO")

        with caplog.at_level(logging.INFO):
            logger.debug("This should not appear")
            logger.info("This should appear")

        assert "This should not appear" not in caplog.text
        assert "This should appear" in caplog.text


def test_progress_prints_message(capsys):
    """Test that progress writes to stdout."""
    progress("pending  1-CreateUsers")
    assert "pending  1-CreateUsers" in capsys.readouterr().out
