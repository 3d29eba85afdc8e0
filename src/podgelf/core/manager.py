"""Logging manager responsible for runtime configuration and lifecycle."""

from __future__ import annotations

import logging
from typing import Callable

from ..config.schema import GelfConfig
from ..handlers.console import ConsoleHandlerConfig, build_console_handler
from ..handlers.gelf_udp import GELFUDPHandler, build_gelf_udp_handler
from .levels import ensure_level, register_trace_level
from .validation import validate_configuration

DIAGNOSTICS_LOGGER = "podgelf"


class LogManager:
    """Own the GELF handler attached to the root logger."""

    def __init__(self) -> None:
        self._config: GelfConfig | None = None
        self._handler: GELFUDPHandler | None = None
        self._diagnostics_handler: logging.Handler | None = None

    @property
    def handler(self) -> GELFUDPHandler | None:
        return self._handler

    @property
    def configured(self) -> bool:
        return self._handler is not None

    # ------------------------------------------------------------------
    def configure(self, config: GelfConfig) -> GELFUDPHandler:
        """Apply the supplied configuration, replacing any previous handler."""

        validate_configuration(config)
        self._teardown()

        self._config = config
        register_trace_level(config.enable_trace)
        self._configure_diagnostics()

        handler = build_gelf_udp_handler(config)
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
        root_logger.setLevel(handler.level)
        self._handler = handler
        return handler

    # ------------------------------------------------------------------
    def shutdown(self, callback: Callable[[], None] | None = None) -> None:
        """Detach the handler and release its socket."""

        handler = self._handler
        self._teardown()
        self._config = None
        if handler is not None:
            handler.appender.shutdown(callback)
        elif callback is not None:
            callback()

    # ------------------------------------------------------------------
    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    # ------------------------------------------------------------------
    def _configure_diagnostics(self) -> None:
        assert self._config is not None
        diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
        if self._config.diagnostics:
            level = ensure_level(self._config.diagnostics_level)
            handler = build_console_handler(
                ConsoleHandlerConfig(stream=self._config.diagnostics, level=level)
            )
            diagnostics.addHandler(handler)
            diagnostics.setLevel(level)
            self._diagnostics_handler = handler

    def _teardown(self) -> None:
        root_logger = logging.getLogger()
        if self._handler is not None:
            if self._handler in root_logger.handlers:
                root_logger.removeHandler(self._handler)
            try:
                self._handler.flush()
            except Exception:
                pass
            self._handler.close()
            self._handler = None

        if self._diagnostics_handler is not None:
            diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)
            diagnostics.removeHandler(self._diagnostics_handler)
            diagnostics.setLevel(logging.NOTSET)
            self._diagnostics_handler.close()
            self._diagnostics_handler = None


GLOBAL_MANAGER = LogManager()
