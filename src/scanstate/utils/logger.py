"""Minimal logging utilities for scanstate.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from scanstate.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Entering state %s", "lex_number")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "scanstate." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("grammar")
        >>> logger.name
        'scanstate.grammar'
    """
    if not (name == "scanstate" or name.startswith("scanstate.")):
        name = f"scanstate.{name}"
    return logging.getLogger(name)
