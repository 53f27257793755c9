"""Logging configuration and utilities."""

import json
import logging
import sys
from collections.abc import Mapping
from typing import TextIO

from briefbutler_connector.config import settings

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_log_level(name: str | None) -> int:
    """Map a level name to a logging level; unknown names fall back to INFO."""
    if not name:
        return logging.INFO
    return LOG_LEVELS.get(name.strip().upper(), logging.INFO)


class JSONArgsFilter(logging.Filter):
    """Append positional arguments that are not %-format arguments as a JSON array.

    Lets callers write ``logger.error("Response data:", body)`` and get
    ``Response data: [{...}]`` on the line instead of a formatting error.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args and not _consumes_args(record):
            values = list(record.args) if isinstance(record.args, tuple) else [record.args]
            record.msg = f"{record.msg} {json.dumps(values, default=str)}"
            record.args = ()
        return True


def _consumes_args(record: logging.LogRecord) -> bool:
    msg = str(record.msg)
    # A single dict argument is stored as a mapping; any conversion consumes it
    if isinstance(record.args, Mapping):
        return "%" in msg.replace("%%", "")
    try:
        msg % record.args
    except (TypeError, ValueError):
        return False
    return True


def setup_logger(
    name: str | None = None,
    level: str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Set up and return a configured logger."""
    logger = logging.getLogger(name or __name__)
    logger.setLevel(resolve_log_level(level if level is not None else settings.log_level))

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.addFilter(JSONArgsFilter())

    return logger


# Default logger instance
logger = setup_logger("briefbutler")
