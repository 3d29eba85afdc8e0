"""UDP transport for compressed GELF payloads."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable

__all__ = ["MAX_PACKET_SIZE", "UDPTransport"]

MAX_PACKET_SIZE = 8192

logger = logging.getLogger(__name__)

SocketFactory = Callable[[], socket.socket]


def _udp_socket() -> socket.socket:
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)


class UDPTransport:
    """Send payloads as single datagrams over one shared socket.

    Sends are fire-and-forget: oversized payloads and socket errors are
    reported on the module logger and never raised.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        max_packet_size: int = MAX_PACKET_SIZE,
        socket_factory: SocketFactory | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.max_packet_size = max_packet_size
        self._sock = (socket_factory or _udp_socket)()
        self._closed = False
        self._lock = threading.Lock()

    @property
    def address(self) -> tuple[str, int]:
        return (self.host, self.port)

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, payload: bytes) -> bool:
        """Send ``payload`` unless it exceeds the size ceiling.

        Returns ``True`` when the datagram was handed to the socket.
        """

        size = len(payload)
        if size > self.max_packet_size:
            logger.debug(
                "Message packet length (%d) is larger than %d bytes. Not sending",
                size,
                self.max_packet_size,
            )
            return False

        logger.debug("Message packet length: %d", size)
        try:
            self._sock.sendto(payload, self.address)
        except OSError as exc:
            logger.error("Failed to send GELF packet to %s:%s: %s", self.host, self.port, exc)
            return False
        return True

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._sock.close()
