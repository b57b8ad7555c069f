"""Diagnostic logging setup.

Logging is off unless the DEBUG environment variable is set, in which
case events are appended to a debug log file.

Environment variables:
    DEBUG: Any non-empty value enables the debug log
    TERMCHAT_LOG_FILE: Log file path (default: debug.log)
"""

import logging
import os
from pathlib import Path

PACKAGE_LOGGER = "termchat"
DEFAULT_LOG_FILE = Path("debug.log")
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(enabled: bool | None = None, log_file: Path | str | None = None) -> Path | None:
    """Configure the package logger.

    Args:
        enabled: Force logging on or off (None reads the DEBUG variable)
        log_file: Log file path (None reads TERMCHAT_LOG_FILE)

    Returns:
        Path of the log file, or None when logging is disabled
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if enabled is None:
        enabled = bool(os.getenv("DEBUG"))

    if not enabled:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return None

    path = Path(log_file or os.getenv("TERMCHAT_LOG_FILE") or DEFAULT_LOG_FILE)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.debug("Debug logging enabled")
    return path
