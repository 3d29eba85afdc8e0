"""podgelf public API."""

from .api import configure, get_logger, shutdown
from .core.appender import GELFAppender, build_appender
from .core.events import LogEvent
from .core.levels import Level
from .handlers.gelf_udp import GELFUDPHandler, gelf_fields
from .version import __version__

__all__ = [
    "configure",
    "get_logger",
    "shutdown",
    "gelf_fields",
    "GELFAppender",
    "GELFUDPHandler",
    "LogEvent",
    "Level",
    "build_appender",
    "__version__",
]
