"""
Logging setup - one stdout handler for the whole "seo" logger hierarchy.

Every module logs through logging.getLogger("seo.<area>"), so configuring
the "seo" parent once is enough. Called from app.main at import time.
"""

import logging
import sys
from typing import Optional


ROOT_LOGGER_NAME = "seo"

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the "seo" logger with a stdout handler.

    Safe to call more than once: the handler is only added the first time.

    Args:
        level: Level name ("DEBUG", "INFO", ...). Defaults to INFO.

    Returns:
        The configured parent logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel((level or "INFO").upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
