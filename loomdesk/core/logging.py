# loomdesk/core/logging.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from loomdesk.core.config import settings

CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the "loomdesk" logger tree once.

    Console handler always; file handler only when LOG_FILE is set.
    Calling it again does not stack duplicate handlers.
    """
    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    log_file = log_file or settings.LOG_FILE

    logger = logging.getLogger("loomdesk")
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if getattr(logger, "_loomdesk_configured", False):
        return logger

    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(ch)

    # File handler
    if log_file:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)

    logger._loomdesk_configured = True  # type: ignore[attr-defined]
    return logger
