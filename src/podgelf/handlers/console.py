"""Console handler for podgelf's own diagnostics."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any

__all__ = ["ConsoleHandlerConfig", "build_console_handler"]

_DIAGNOSTIC_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class ConsoleHandlerConfig:
    """Configuration for the diagnostics console handler."""

    stream: str = "stderr"
    level: int = logging.DEBUG


def build_console_handler(config: ConsoleHandlerConfig | None = None) -> logging.Handler:
    """Construct a :class:`logging.StreamHandler` based on ``config``."""

    cfg = config or ConsoleHandlerConfig()
    stream: Any
    if cfg.stream == "stdout":
        stream = sys.stdout
    else:
        stream = sys.stderr
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(cfg.level)
    handler.setFormatter(logging.Formatter(_DIAGNOSTIC_FORMAT))
    return handler
