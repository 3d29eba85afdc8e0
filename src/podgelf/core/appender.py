"""GELF appender: event in, compressed UDP datagram out."""

from __future__ import annotations

import atexit
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping

from ..config.schema import GelfConfig
from .compression import CompressionError, compress_packet
from .events import LogEvent
from .fields import build_default_fields
from .packet import build_packet
from .transport import UDPTransport
from .validation import validate_configuration

__all__ = ["GELFAppender", "build_appender"]

logger = logging.getLogger(__name__)

ShutdownCallback = Callable[[], None]


class GELFAppender:
    """Turn log events into GELF datagrams without blocking the caller.

    Packets are built on the calling thread; compression and sending run on
    ``executor``. No ordering is kept between events.

    Failures never reach the caller. They are logged on the ``podgelf``
    loggers, which carry no handler of their own: errors go to the root
    handlers, or to ``logging.lastResort`` on stderr when there are none.
    """

    def __init__(
        self,
        *,
        host: str = "localhost",
        port: int = 12201,
        hostname: str,
        facility: str | None = None,
        custom_fields: Mapping[str, Any] | None = None,
        append_category: str | None = None,
        transport: UDPTransport | None = None,
        executor: Executor | None = None,
        workers: int = 2,
    ) -> None:
        self.hostname = hostname
        self.append_category = append_category or None
        self.default_fields: Mapping[str, Any] = MappingProxyType(
            build_default_fields(custom_fields, facility)
        )
        self.transport = transport or UDPTransport(host, port)
        self._executor = executor or ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="podgelf"
        )
        self._released = False
        self._lock = threading.Lock()
        atexit.register(self._release)
        logger.debug(
            "Appender created for %s:%s (hostname=%s, fields=%s)",
            self.transport.host,
            self.transport.port,
            hostname,
            sorted(self.default_fields),
        )

    @property
    def released(self) -> bool:
        return self._released

    def prepare_packet(self, event: LogEvent) -> Dict[str, Any]:
        return build_packet(event, self.hostname, self.default_fields, self.append_category)

    def append(self, event: LogEvent) -> None:
        """Queue ``event`` for delivery and return immediately."""

        if self._released:
            logger.debug("Appender already shut down, dropping event")
            return
        try:
            packet = self.prepare_packet(event)
        except Exception:
            logger.exception("Unable to build GELF packet, dropping event")
            return
        try:
            future = self._executor.submit(compress_packet, packet)
        except RuntimeError:
            logger.debug("Executor shut down, dropping event")
            return
        future.add_done_callback(self._on_compressed)

    __call__ = append

    def _on_compressed(self, future: Future[bytes]) -> None:
        try:
            payload = future.result()
        except CompressionError as exc:
            logger.error("%s", exc, exc_info=exc.__cause__)
            return
        except Exception:
            logger.exception("Unexpected failure while compressing GELF packet")
            return
        self.transport.send(payload)

    def shutdown(self, callback: ShutdownCallback | None = None) -> None:
        """Release the socket once and invoke ``callback``.

        Repeated calls only invoke their callback.
        """

        logger.debug("Shutdown called")
        self._release()
        if callback is not None:
            callback()

    def _release(self) -> None:
        with self._lock:
            if self._released:
                return
            self._released = True
        atexit.unregister(self._release)
        self._executor.shutdown(wait=False)
        self.transport.close()


def build_appender(config: GelfConfig, *, executor: Executor | None = None) -> GELFAppender:
    """Validate ``config`` and construct a :class:`GELFAppender` from it."""

    validate_configuration(config)
    return GELFAppender(
        host=config.host,
        port=config.port,
        hostname=config.hostname,
        facility=config.facility,
        custom_fields=config.custom_fields,
        append_category=config.append_category,
        executor=executor,
        workers=config.workers,
    )
