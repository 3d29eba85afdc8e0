"""Configuration schema definition for podgelf."""

from __future__ import annotations

import socket
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

DEFAULT_CONFIG: Dict[str, Any] = {
    "host": "localhost",
    "port": 12201,
    "hostname": None,
    "facility": None,
    "custom_fields": {},
    "append_category": None,
    "workers": 2,
    "level": "INFO",
    "enable_trace": False,
    "diagnostics": None,
    "diagnostics_level": "DEBUG",
}

_ALIASES = {
    "customFields": "custom_fields",
    "appendCategory": "append_category",
    "enableTrace": "enable_trace",
    "diagnosticsLevel": "diagnostics_level",
}
_ALIASES.update({alias.lower(): name for alias, name in list(_ALIASES.items())})


def default_config() -> Dict[str, Any]:
    """Return a deep copy of the default configuration mapping."""

    return deepcopy(DEFAULT_CONFIG)


@dataclass(slots=True)
class GelfConfig:
    host: str = "localhost"
    port: int = 12201
    hostname: str = field(default_factory=socket.gethostname)
    facility: str | None = None
    custom_fields: Dict[str, Any] = field(default_factory=dict)
    append_category: str | None = None
    workers: int = 2
    level: str | int = "INFO"
    enable_trace: bool = False
    diagnostics: str | None = None
    diagnostics_level: str | int = "DEBUG"


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in data.items():
        normalized[_ALIASES.get(key, key)] = value
    return normalized


def _to_port(value: Any) -> Any:
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return value


def _to_custom_fields(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return {key: item for key, item in value.items()}
    return value


def build_config(data: Mapping[str, Any]) -> GelfConfig:
    merged = default_config()
    merged.update(_normalize_keys(data))

    hostname = merged.get("hostname") or socket.gethostname()
    workers = merged.get("workers", 2)
    if isinstance(workers, str) and workers.strip().isdigit():
        workers = int(workers)

    return GelfConfig(
        host=merged.get("host") or "localhost",
        port=_to_port(merged.get("port") or 12201),
        hostname=hostname,
        facility=merged.get("facility") or None,
        custom_fields=_to_custom_fields(merged.get("custom_fields")),
        append_category=merged.get("append_category") or None,
        workers=workers,
        level=merged.get("level", "INFO"),
        enable_trace=bool(merged.get("enable_trace", False)),
        diagnostics=merged.get("diagnostics") or None,
        diagnostics_level=merged.get("diagnostics_level", "DEBUG"),
    )
