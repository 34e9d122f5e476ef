"""Logging configuration for transcript-dictate."""

import logging
import sys

from transcript_dictate.config import APP_DIR

LOG_DIR = APP_DIR / "logs"
LOG_FILE = LOG_DIR / "transcript_dictate.log"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the package logger with a console and a file handler.

    Args:
        level: Console logging level (default: INFO)

    Returns:
        The ``transcript_dictate`` logger
    """
    logger = logging.getLogger("transcript_dictate")
    logger.setLevel(logging.DEBUG)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
    except OSError as e:
        # Read-only home directory or missing permissions
        logger.warning(f"Could not set up file logging: {e}")

    return logger
