"""
Logging helpers

The package only creates module loggers; it attaches no handler unless
setup_logging() is called (the DEBUG config flag does this, and clearing the
flag calls teardown_logging()).
"""

import logging
from typing import Optional

PACKAGE_LOGGER = 'zabbix_rpc'

_handler: Optional[logging.Handler] = None


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Send package log records to stderr.
    Safe to call multiple times (later calls only change the level).
    """
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        logger.addHandler(_handler)

    _handler.setLevel(level)
    logger.setLevel(level)
    return logger


def teardown_logging() -> None:
    """Undo setup_logging(): detach the handler and reset the level."""
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    """
    Return a module-specific logger.
    """
    return logging.getLogger(name)
