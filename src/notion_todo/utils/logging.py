"""Logging configuration for the todo CLI.

The library modules only create loggers; handlers are set up here, once, when
the CLI starts.
"""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP libraries stay at INFO or above so request traces do not flood debug output
QUIET_LOGGERS = ("httpx", "httpcore")


def log_level(name: str) -> int:
    """Resolve a level name such as ``debug`` to its numeric value.

    :param name: Level name, case-insensitive.
    :returns: Numeric logging level.
    :raises ValueError: If the name is not a logging level.
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {name}")
    return level


def configure_logging(level_name: str | None = None, *, default_level: str = "INFO") -> None:
    """Send every log record to stdout through a single handler.

    The level is the first of ``level_name``, the LOG_LEVEL env var
    (DEBUG/INFO/WARNING/ERROR/CRITICAL) and ``default_level`` that is set.

    :param level_name: Level chosen explicitly, e.g. by a command line flag.
    :param default_level: Level used when nothing else sets one.
    :raises ValueError: If the level name is not a logging level.
    """
    level = log_level(level_name or os.environ.get("LOG_LEVEL") or default_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug(f"Logging configured: level={logging.getLevelName(level)}")
