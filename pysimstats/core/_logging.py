"""
Logging setup for pysimstats.

Library modules only create loggers; handlers are attached here, and
only when an application (the walkthrough CLI) asks for them.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER = "pysimstats"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling this more than once adjusts the level but never adds a
    second handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
