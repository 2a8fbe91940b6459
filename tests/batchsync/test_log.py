"""Unit tests for logging functionality."""

import logging
import logging.handlers

import colorlog

from batchsync import (
    Environment,
    Settings,
    configure_logging,
    get_logger,
    setup_logging,
    setup_test_logging,
)


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    setup_test_logging()


def test_setup_logging_custom_level() -> None:
    """Test setup_logging with custom level."""
    setup_logging(level=logging.DEBUG)
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    setup_test_logging()


def test_colored_console_handler() -> None:
    setup_logging(use_colors=True)
    [handler] = logging.getLogger().handlers
    assert isinstance(handler.formatter, colorlog.ColoredFormatter)
    setup_test_logging()


def test_production_file_rotation(tmp_path) -> None:
    """Test file logging outside tests rotates."""
    setup_logging(enable_file_logging=True, log_dir=tmp_path)
    handlers = logging.getLogger().handlers
    assert any(
        isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in handlers
    )
    assert (tmp_path / "batchsync.log").exists()
    setup_test_logging()


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"


def test_configure_logging_applies_settings_level() -> None:
    """Test the configured level and test-mode file handler come from settings."""
    configure_logging(Settings(environment=Environment.TESTING, log_level="WARNING"))
    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert any(
        isinstance(handler, logging.FileHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in root_logger.handlers
    )
    setup_test_logging()


def test_configure_logging_development_console_only() -> None:
    configure_logging(Settings(environment=Environment.DEVELOPMENT, log_level="ERROR"))
    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR
    assert not any(
        isinstance(handler, logging.FileHandler) for handler in root_logger.handlers
    )
    setup_test_logging()
