"""Severity mapping between the host logging framework and syslog."""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict

__all__ = [
    "Level",
    "LEVEL_MAPPING",
    "LOG_EMERG",
    "LOG_ALERT",
    "LOG_CRIT",
    "LOG_ERROR",
    "LOG_WARNING",
    "LOG_NOTICE",
    "LOG_INFO",
    "LOG_DEBUG",
    "TRACE_LEVEL_NAME",
    "TRACE_LEVEL_NUM",
    "ensure_level",
    "level_from_levelno",
    "map_level",
    "register_trace_level",
]

TRACE_LEVEL_NAME = "TRACE"
TRACE_LEVEL_NUM = 5

LOG_EMERG = 0  # unused
LOG_ALERT = 1  # unused
LOG_CRIT = 2
LOG_ERROR = 3
LOG_WARNING = 4
LOG_NOTICE = 5  # unused
LOG_INFO = 6
LOG_DEBUG = 7


class Level(enum.Enum):
    """Severities a log event can carry."""

    ALL = "ALL"
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


LEVEL_MAPPING: Dict[Level, int] = {
    Level.ALL: LOG_DEBUG,
    Level.TRACE: LOG_DEBUG,
    Level.DEBUG: LOG_DEBUG,
    Level.INFO: LOG_INFO,
    Level.WARN: LOG_WARNING,
    Level.ERROR: LOG_ERROR,
    Level.FATAL: LOG_CRIT,
}


def map_level(level: Any) -> int | None:
    """Return the syslog severity for ``level``.

    Anything outside the table yields ``None`` instead of raising.
    """

    try:
        return LEVEL_MAPPING.get(level)
    except TypeError:
        return None


def level_from_levelno(levelno: int) -> Level:
    """Bucket a stdlib numeric level into a :class:`Level`."""

    if levelno <= logging.NOTSET:
        return Level.ALL
    if levelno <= TRACE_LEVEL_NUM:
        return Level.TRACE
    if levelno <= logging.DEBUG:
        return Level.DEBUG
    if levelno <= logging.INFO:
        return Level.INFO
    if levelno <= logging.WARNING:
        return Level.WARN
    if levelno <= logging.ERROR:
        return Level.ERROR
    return Level.FATAL


def register_trace_level(enable: bool = True) -> None:
    """Register the TRACE level on the stdlib logging module.

    When ``enable`` is ``False`` the function becomes a no-op. The level is
    installed only once even if called repeatedly.
    """

    if not enable:
        return

    if logging.getLevelName(TRACE_LEVEL_NUM) != TRACE_LEVEL_NAME:
        logging.addLevelName(TRACE_LEVEL_NUM, TRACE_LEVEL_NAME)
    if not hasattr(logging, TRACE_LEVEL_NAME):
        setattr(logging, TRACE_LEVEL_NAME, TRACE_LEVEL_NUM)

    if not hasattr(logging.Logger, "trace"):
        def trace(self: logging.Logger, message: str, *args: object, **kwargs: Any) -> None:  # type: ignore[override]
            if self.isEnabledFor(TRACE_LEVEL_NUM):
                self._log(TRACE_LEVEL_NUM, message, args, **kwargs)

        logging.Logger.trace = trace  # type: ignore[assignment]


def ensure_level(value: int | str) -> int:
    """Normalize user supplied stdlib level values."""

    if isinstance(value, int):
        return value
    name = value.strip().upper()
    if name == TRACE_LEVEL_NAME:
        return TRACE_LEVEL_NUM
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    if isinstance(resolved, int):
        return resolved
    return logging.NOTSET
