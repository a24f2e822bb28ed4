"""
Unit tests for logging configuration.
"""
import logging
import sys

from mps7.logger import set_log_level, setup_logger
from services import ledger_service


def test_setup_logger_defaults_to_warning():
    """Loggers default to WARNING and write to stderr."""
    logger = setup_logger("mps7.tests.default")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    assert logger.handlers[0].stream is sys.stderr


def test_setup_logger_no_duplicate_handlers():
    """Repeated setup does not stack handlers."""
    setup_logger("mps7.tests.repeat")
    logger = setup_logger("mps7.tests.repeat")
    assert len(logger.handlers) == 1


def test_set_log_level_updates_configured_loggers():
    """Level from settings reaches loggers created earlier."""
    logger = setup_logger("mps7.tests.level", level="WARNING")
    set_log_level("DEBUG")
    
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG
    assert ledger_service.logger.level == logging.DEBUG
