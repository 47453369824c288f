"""Structured logging configuration."""

import logging
import sys
from typing import Any


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure structured logging for the engine."""
    # Parent of every cranksmith.* module logger
    logger = logging.getLogger("cranksmith")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    # Format: timestamp - level - module - message
    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


# Global logger instance
logger = setup_logging()


def log_calculation(operation: str, **kwargs: Any) -> None:
    """Log a completed engine calculation."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.debug(f"CALC {operation} {extra}".strip())


def log_validation_failure(subject: str, errors: list[str]) -> None:
    """Log rejected user input at info level (it is expected, not a fault)."""
    logger.info(f"VALIDATION {subject} rejected errors={len(errors)} first={errors[0]!r}")


def log_error(message: str, exc: Exception | None = None, **kwargs: Any) -> None:
    """Log an error with optional exception."""
    extra = " ".join(f"{k}={v}" for k, v in kwargs.items())
    if exc:
        logger.error(f"ERROR {message} {extra}".strip(), exc_info=exc)
    else:
        logger.error(f"ERROR {message} {extra}".strip())
