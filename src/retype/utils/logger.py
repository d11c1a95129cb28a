"""Minimal logging utilities for retype.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications decide where records go.

Example:
    >>> from retype.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Replaying document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "retype." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'retype.mymodule'
    """
    if not (name == "retype" or name.startswith("retype.")):
        name = f"retype.{name}"
    return logging.getLogger(name)
