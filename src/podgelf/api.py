"""Public API surface for podgelf."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from .config.loader import load_configuration
from .core.manager import GLOBAL_MANAGER
from .handlers.gelf_udp import GELFUDPHandler


def configure(overrides: Dict[str, Any] | None = None) -> GELFUDPHandler:
    """Configure podgelf using the provided overrides."""

    config = load_configuration(overrides or {})
    return GLOBAL_MANAGER.configure(config)


def _ensure_configured() -> None:
    if not GLOBAL_MANAGER.configured:
        configure({})


def get_logger(name: str) -> logging.Logger:
    """Return a logger with the given name."""

    _ensure_configured()
    return GLOBAL_MANAGER.get_logger(name)


def shutdown(callback: Callable[[], None] | None = None) -> None:
    """Detach the GELF handler and close its socket."""

    GLOBAL_MANAGER.shutdown(callback)
