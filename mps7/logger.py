"""
Logging configuration for the MPS7 decoder.
Log output goes to stderr so the report on stdout stays machine-readable.
"""
import logging
import os
import sys
from typing import Optional, Set

FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names of loggers created through setup_logger
_configured: Set[str] = set()


def _resolve_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.WARNING)


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Configure and return a logger instance.
    
    Modules call this at import time, before settings are loaded, so the
    initial level comes from the environment. set_log_level() applies the
    validated setting once it is available.
    
    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to env LOG_LEVEL or WARNING.
    
    Returns:
        Configured logger instance
    """
    log_level = _resolve_level(level or os.getenv("LOG_LEVEL", "WARNING"))
    
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    
    # Avoid duplicate handlers
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    
    _configured.add(name)
    return logger


def set_log_level(level: str) -> None:
    """
    Apply a level to every logger created through setup_logger.
    
    Args:
        level: Validated level name, usually Settings.log_level
    """
    log_level = _resolve_level(level)
    for name in _configured:
        logger = logging.getLogger(name)
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
