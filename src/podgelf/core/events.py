"""Log event model consumed by the appender."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .levels import Level

__all__ = ["LogEvent"]


@dataclass(slots=True)
class LogEvent:
    """One call into the logging framework.

    ``data[0]`` is the primary message and ``data[1]`` an optional error-like
    object. The field merger removes ``data[0]`` when it carries per-call
    GELF fields, so the list is mutated in place.
    """

    data: List[Any] = field(default_factory=list)
    level: Level = Level.INFO
    category_name: str = "default"
    timestamp: float | None = None
