"""Logging helpers for Pincel.

Every module logs through a standard library logger under the "pincel"
namespace. The library never installs handlers; an editor enables output with
``logging.getLogger("pincel").setLevel(logging.DEBUG)`` plus a handler.

Example:
    >>> from pincel.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Classifying region %s", region)
"""

from __future__ import annotations

import logging

LOGGER_NAMESPACE = "pincel"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger under the "pincel." namespace

    Example:
        >>> get_logger("mymodule").name
        'pincel.mymodule'
    """
    if not (name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}.")):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


def debug_enabled(logger: logging.Logger) -> bool:
    """True if ``logger`` would emit DEBUG records.

    Classification passes run on every keystroke; callers use this to skip
    collecting timings nobody will see.
    """
    return logger.isEnabledFor(logging.DEBUG)
