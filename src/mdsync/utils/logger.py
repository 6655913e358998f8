"""
Console logging setup for the mdsync logger hierarchy.
"""
import logging
import sys

LOGGER_NAME = "mdsync"
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


def setup_logger(level: str | int = logging.WARNING) -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Safe to call more than once: existing handlers are replaced, so repeated
    CLI invocations in one process do not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
    logger.addHandler(handler)
    return logger
