"""Time utilities for podgelf."""

from __future__ import annotations

from datetime import datetime, timezone

__all__ = ["epoch_seconds", "utcnow"]


def utcnow() -> datetime:
    """Return a timezone-aware UTC ``datetime`` instance."""

    return datetime.now(timezone.utc)


def epoch_seconds() -> float:
    """Return the wall-clock time as fractional seconds since the epoch."""

    return utcnow().timestamp()
