"""Logging setup for the reports CLI and anything else run as a script."""

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty HTTP libraries never log below INFO, even when DEBUG is requested
QUIET_LOGGERS = ("urllib3", "requests", "sentry_sdk")


def resolve_level(level_name: str) -> int:
    """Turn a level name such as "debug" into its logging constant.

    :raises ValueError: If the name is not a standard logging level.
    """
    level = logging.getLevelNamesMapping().get(level_name.strip().upper())
    if level is None:
        raise ValueError(f"Invalid log level: {level_name}")
    return level


def configure_logging(level_name: str | None = None) -> None:
    """Send all logs to stdout through a single root handler.

    Safe to call repeatedly; earlier root handlers are replaced.

    :param level_name: Level to use. Falls back to LOG_LEVEL, then INFO.
    """
    level_name = level_name or os.environ.get("LOG_LEVEL", "INFO")
    level = resolve_level(level_name)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug(f"Logging configured: level={logging.getLevelName(level)}")
