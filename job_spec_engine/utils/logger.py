"""Logging configuration for the Job Spec Engine."""

import logging
import sys
from typing import Optional, Union

from job_spec_engine.config import LOG_LEVEL


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Get a logger writing `time | name | level | message` lines to stdout.
    Level defaults to LOG_LEVEL from the environment; unknown names fall back to INFO.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        if level is None:
            level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if level is not None:
        logger.setLevel(level)
    return logger
