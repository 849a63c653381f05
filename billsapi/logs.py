"""Thin helpers for logging request and error messages."""

import logging

logger = logging.getLogger("billsapi")


def log_request(message: str) -> None:
    """Log an informational message about a request."""
    logger.info("%s", message)


def log_error(message: str) -> None:
    """Log an error message."""
    logger.error("%s", message)