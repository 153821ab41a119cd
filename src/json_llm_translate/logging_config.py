"""Logging setup for the command-line tool."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "json_llm_translate"


def setup_logging(log_level_str: str = "INFO") -> logging.Logger:
    """
    Configure the package logger to write progress to stderr.

    Args:
        log_level_str: The logging level as a string (e.g., 'INFO', 'DEBUG').

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    logger.setLevel(log_level)

    # Clear any existing handlers to prevent duplicate logging
    if logger.hasHandlers():
        logger.handlers.clear()

    # Keep our messages out of the root logger
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)

    return logger
