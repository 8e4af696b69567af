"""
Logging configuration for the posemapper package.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'posemapper' package logger.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Optional path to also write logs to.
    """
    logger = logging.getLogger("posemapper")
    logger.setLevel(level)

    # Avoid duplicate handlers when the app factory runs more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
