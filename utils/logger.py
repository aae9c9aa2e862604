"""
utils/logger.py
---------------
Logging for the LocalEyes backend.

Repositories, services and the connection pool call `get_logger(__name__)`.
The first call attaches one stdout handler to the root logger at the level
named by LOG_LEVEL; later calls only look up the named logger.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_configured = False


def _configure_root(level: str = LOG_LEVEL) -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Named logger for a LocalEyes module, e.g. ``repositories.post_repo``."""
    _configure_root()
    return logging.getLogger(name)
