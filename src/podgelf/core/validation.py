"""Configuration validation helpers."""

from __future__ import annotations

from typing import Mapping

from ..config.schema import GelfConfig

_DIAGNOSTIC_STREAMS = {"stderr", "stdout"}


class ConfigurationError(ValueError):
    """Raised when configuration validation fails."""


def validate_configuration(config: GelfConfig) -> None:
    """Ensure configuration values can build a working appender."""

    if not isinstance(config.host, str) or not config.host.strip():
        raise ConfigurationError("'host' must be a non-empty string")

    if isinstance(config.port, bool) or not isinstance(config.port, int):
        raise ConfigurationError(f"'port' must be an integer, got {config.port!r}")
    if not 0 < config.port < 65536:
        raise ConfigurationError(f"'port' must be between 1 and 65535, got {config.port}")

    if not isinstance(config.hostname, str) or not config.hostname:
        raise ConfigurationError("'hostname' must be a non-empty string")

    if config.facility is not None and not isinstance(config.facility, str):
        raise ConfigurationError(f"'facility' must be a string, got {config.facility!r}")

    if not isinstance(config.custom_fields, Mapping):
        raise ConfigurationError(
            f"'custom_fields' must be a mapping, got {type(config.custom_fields).__name__}"
        )

    if config.append_category is not None and not isinstance(config.append_category, str):
        raise ConfigurationError(
            f"'append_category' must be a string, got {config.append_category!r}"
        )

    if isinstance(config.workers, bool) or not isinstance(config.workers, int) or config.workers < 1:
        raise ConfigurationError(f"'workers' must be a positive integer, got {config.workers!r}")

    if config.diagnostics is not None and config.diagnostics not in _DIAGNOSTIC_STREAMS:
        raise ConfigurationError(
            f"'diagnostics' must be one of {', '.join(sorted(_DIAGNOSTIC_STREAMS))}, got {config.diagnostics!r}"
        )
