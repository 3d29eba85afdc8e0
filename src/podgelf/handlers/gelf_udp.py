"""GELF UDP handler implementation."""

from __future__ import annotations

import logging
from typing import Any, List

from ..config.schema import GelfConfig
from ..core.appender import GELFAppender, build_appender
from ..core.events import LogEvent
from ..core.fields import GELF_MARKER, is_field_carrier
from ..core.levels import ensure_level, level_from_levelno

__all__ = ["GELFUDPHandler", "build_gelf_udp_handler", "gelf_fields"]

_INTERNAL_LOGGER = "podgelf"


def gelf_fields(**fields: Any) -> dict[str, Any]:
    """Return a per-call field carrier to pass as the log message.

    ``logger.info(gelf_fields(_request_id="r1"), "done %s", 3)``
    """

    return {GELF_MARKER: True, **fields}


def _is_internal(record: logging.LogRecord) -> bool:
    return record.name == _INTERNAL_LOGGER or record.name.startswith(_INTERNAL_LOGGER + ".")


class GELFUDPHandler(logging.Handler):
    """Forward stdlib log records to a :class:`GELFAppender`."""

    def __init__(self, appender: GELFAppender, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.appender = appender

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if _is_internal(record):
            return False
        return bool(super().filter(record))

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        data: List[Any]
        if is_field_carrier(record.msg):
            # rewrite the shared record so other handlers see the real message
            carrier = record.msg
            raw_args = record.args or ()
            args = raw_args if isinstance(raw_args, tuple) else (raw_args,)
            record.msg = args[0] if args else ""
            record.args = args[1:]
            data = [carrier, record.getMessage() if args else None]
        else:
            data = [record.getMessage()]

        if record.exc_info:
            formatter = self.formatter or logging.Formatter()
            data.append({"stack": formatter.formatException(record.exc_info)})

        return LogEvent(
            data=data,
            level=level_from_levelno(record.levelno),
            category_name=record.name,
            timestamp=record.created,
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.appender.append(self.to_event(record))
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        try:
            self.appender.shutdown()
        finally:
            super().close()


def build_gelf_udp_handler(config: GelfConfig | None = None) -> GELFUDPHandler:
    cfg = config or GelfConfig()
    return GELFUDPHandler(build_appender(cfg), level=ensure_level(cfg.level))
