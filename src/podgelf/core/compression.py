"""Serialization and compression of GELF packets."""

from __future__ import annotations

import gzip
import json
from typing import Any, Dict, Mapping

__all__ = ["CompressionError", "compress_packet", "decompress_packet"]


class CompressionError(RuntimeError):
    """Raised when a packet cannot be serialized or compressed."""


def compress_packet(packet: Mapping[str, Any]) -> bytes:
    """Serialize ``packet`` to JSON and gzip it."""

    try:
        data = json.dumps(packet, ensure_ascii=False).encode("utf-8")
        return gzip.compress(data)
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise CompressionError(f"Unable to compress GELF packet: {exc}") from exc


def decompress_packet(payload: bytes) -> Dict[str, Any]:
    """Inverse of :func:`compress_packet`."""

    decoded = json.loads(gzip.decompress(payload).decode("utf-8"))
    if not isinstance(decoded, dict):
        raise ValueError("GELF payload is not a JSON object")
    return decoded
