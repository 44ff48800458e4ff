"""Logger configuration for the sentiment summarization package.

Library modules only ever call ``logging.getLogger(__name__)``; applications
that want to see pipeline output call :func:`setup_logger` once.
"""

import logging
import os
import sys
from typing import Optional

PACKAGE_LOGGER = "sentiment_summary"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(level: int = logging.INFO,
                 log_file: Optional[str] = None) -> logging.Logger:
    """Sets up the package logger with console and optional file output.

    Args:
        level: Logging level (default: logging.INFO)
        log_file: Path for a log file. Directories will be created if needed.

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    # Clear existing handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger

