import logging
import os
import sys


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger with the given name.
    Avoids duplicate handlers and respects ESOP_LOG_LEVEL.
    """
    logger = logging.getLogger(name)

    log_level_str = os.getenv("ESOP_LOG_LEVEL", "WARNING").upper()
    logger.setLevel(getattr(logging, log_level_str, logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%SZ"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False

    return logger


def set_level(level: int):
    """Change the level of the package logger (used by the CLI's --verbose)."""
    logger.setLevel(level)


# Default library logger; modules log through children of it
logger = get_logger("esop_synthesis")
