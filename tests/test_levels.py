from __future__ import annotations

import logging

import pytest

from podgelf.core.levels import (
    LOG_CRIT,
    LOG_DEBUG,
    LOG_ERROR,
    LOG_INFO,
    LOG_WARNING,
    TRACE_LEVEL_NUM,
    Level,
    ensure_level,
    level_from_levelno,
    map_level,
    register_trace_level,
)


@pytest.mark.parametrize(
    ("level", "expected"),
    [
        (Level.ALL, 7),
        (Level.TRACE, 7),
        (Level.DEBUG, 7),
        (Level.INFO, 6),
        (Level.WARN, 4),
        (Level.ERROR, 3),
        (Level.FATAL, 2),
    ],
)
def test_map_level_table(level: Level, expected: int) -> None:
    assert map_level(level) == expected


def test_syslog_constants() -> None:
    assert (LOG_CRIT, LOG_ERROR, LOG_WARNING, LOG_INFO, LOG_DEBUG) == (2, 3, 4, 6, 7)


@pytest.mark.parametrize("unknown", ["INFO", 20, None, ["not", "hashable"]])
def test_map_level_unknown_passes_through_as_none(unknown: object) -> None:
    assert map_level(unknown) is None


@pytest.mark.parametrize(
    ("levelno", "expected"),
    [
        (logging.NOTSET, Level.ALL),
        (TRACE_LEVEL_NUM, Level.TRACE),
        (logging.DEBUG, Level.DEBUG),
        (15, Level.INFO),
        (logging.INFO, Level.INFO),
        (logging.WARNING, Level.WARN),
        (logging.ERROR, Level.ERROR),
        (logging.CRITICAL, Level.FATAL),
    ],
)
def test_level_from_levelno(levelno: int, expected: Level) -> None:
    assert level_from_levelno(levelno) is expected


def test_register_trace_level_is_idempotent() -> None:
    register_trace_level()
    register_trace_level()

    assert logging.getLevelName(TRACE_LEVEL_NUM) == "TRACE"
    assert hasattr(logging.Logger, "trace")


def test_ensure_level_accepts_names_and_numbers() -> None:
    assert ensure_level("warning") == logging.WARNING
    assert ensure_level(" trace ") == TRACE_LEVEL_NUM
    assert ensure_level("15") == 15
    assert ensure_level(logging.ERROR) == logging.ERROR
    assert ensure_level("bogus") == logging.NOTSET
