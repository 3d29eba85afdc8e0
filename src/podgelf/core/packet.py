"""GELF packet assembly."""

from __future__ import annotations

import traceback
from typing import Any, Dict, Mapping

from ..utils.time import epoch_seconds
from .events import LogEvent
from .fields import merge_custom_fields
from .levels import map_level

__all__ = ["GELF_VERSION", "build_packet", "extract_trace"]

GELF_VERSION = "1.1"


def extract_trace(item: Any) -> str:
    """Return the stack trace carried by an error-like ``item``."""

    if not item:
        return ""
    if isinstance(item, Mapping):
        stack = item.get("stack")
    elif isinstance(item, BaseException):
        stack = "".join(traceback.format_exception(type(item), item, item.__traceback__))
    else:
        stack = getattr(item, "stack", None)
    if stack is None:
        return ""
    return stack if isinstance(stack, str) else str(stack)


def build_packet(
    event: LogEvent,
    hostname: str,
    defaults: Mapping[str, Any],
    append_category: str | None = None,
) -> Dict[str, Any]:
    """Build the GELF object for ``event``.

    Runs the field merger first, so a field carrier in ``event.data[0]`` is
    consumed before the message is read.
    """

    packet: Dict[str, Any] = {}
    merge_custom_fields(event, defaults, packet, append_category)

    data = event.data
    packet["short_message"] = data[0] if data else None
    packet["full_message"] = extract_trace(data[1]) if len(data) > 1 else ""
    packet["version"] = GELF_VERSION
    if "timestamp" not in packet:
        packet["timestamp"] = event.timestamp if event.timestamp is not None else epoch_seconds()
    packet["host"] = hostname
    packet["level"] = map_level(event.level)
    return packet
