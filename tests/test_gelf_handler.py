from __future__ import annotations

import io
import logging
import socket
from typing import Iterator

import pytest

import podgelf
from podgelf.core.appender import GELFAppender
from podgelf.core.compression import decompress_packet
from podgelf.core.levels import Level
from podgelf.core.manager import GLOBAL_MANAGER
from podgelf.core.transport import UDPTransport
from podgelf.handlers.gelf_udp import GELFUDPHandler, gelf_fields


@pytest.fixture
def handler(fake_socket, sync_executor) -> Iterator[GELFUDPHandler]:
    transport = UDPTransport("graylog.local", 12201, socket_factory=lambda: fake_socket)
    appender = GELFAppender(
        hostname="web-1",
        transport=transport,
        executor=sync_executor,
        append_category="logger",
    )
    gelf_handler = GELFUDPHandler(appender)
    yield gelf_handler
    gelf_handler.close()


def _logger(name: str, handler: GELFUDPHandler) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger


def _sent(fake_socket) -> list[dict]:
    return [decompress_packet(payload) for payload, _ in fake_socket.sent]


def test_record_becomes_gelf_packet(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.orders", handler)

    logger.warning("order %s delayed", 42)

    (packet,) = _sent(fake_socket)
    assert packet["short_message"] == "order 42 delayed"
    assert packet["full_message"] == ""
    assert packet["level"] == 4
    assert packet["_logger"] == "tests.orders"
    assert packet["host"] == "web-1"


def test_carrier_message_with_args(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.carrier", handler)

    logger.info(gelf_fields(_request_id="r1", _id="ignored"), "done %s in %sms", "job", 12)

    (packet,) = _sent(fake_socket)
    assert packet["short_message"] == "done job in 12ms"
    assert packet["_request_id"] == "r1"
    assert "_id" not in packet


def test_carrier_without_message(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.carrier", handler)

    logger.info(gelf_fields(_only="fields"))

    (packet,) = _sent(fake_socket)
    assert packet["short_message"] is None
    assert packet["_only"] == "fields"


def test_exception_becomes_full_message(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.errors", handler)

    try:
        raise ValueError("payment declined")
    except ValueError:
        logger.exception(gelf_fields(_order=7), "order failed")

    (packet,) = _sent(fake_socket)
    assert packet["short_message"] == "order failed"
    assert "ValueError: payment declined" in packet["full_message"]
    assert packet["level"] == 3
    assert packet["_order"] == 7


def test_record_is_converted_to_event(handler: GELFUDPHandler) -> None:
    record = logging.LogRecord("tests.convert", logging.CRITICAL, __file__, 1, "hi %s", ("there",), None)

    event = handler.to_event(record)

    assert event.data == ["hi there"]
    assert event.level is Level.FATAL
    assert event.category_name == "tests.convert"
    assert event.timestamp == record.created


def test_internal_records_are_ignored(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("podgelf.tests.internal", handler)

    logger.error("diagnostic")

    assert fake_socket.sent == []


def test_close_shuts_appender_down(handler: GELFUDPHandler, fake_socket) -> None:
    handler.close()

    assert handler.appender.released
    assert fake_socket.close_calls == 1


def test_configure_attaches_handler_to_root(udp_receiver: socket.socket) -> None:
    host, port = udp_receiver.getsockname()

    gelf_handler = podgelf.configure(
        {"host": host, "port": port, "hostname": "web-2", "customFields": {"_env": "test"}}
    )
    logger = podgelf.get_logger("tests.api")
    logger.info("through the api")
    payload, _ = udp_receiver.recvfrom(65536)

    assert gelf_handler in logging.getLogger().handlers
    packet = decompress_packet(payload)
    assert packet["short_message"] == "through the api"
    assert packet["_env"] == "test"
    assert packet["host"] == "web-2"


def test_shutdown_detaches_handler_and_calls_back(udp_receiver: socket.socket) -> None:
    host, port = udp_receiver.getsockname()
    gelf_handler = podgelf.configure({"host": host, "port": port})
    calls: list[str] = []

    podgelf.shutdown(lambda: calls.append("closed"))

    assert gelf_handler not in logging.getLogger().handlers
    assert gelf_handler.appender.released
    assert calls == ["closed"]
    assert not GLOBAL_MANAGER.configured


def test_reconfigure_replaces_previous_handler(udp_receiver: socket.socket) -> None:
    host, port = udp_receiver.getsockname()
    first = podgelf.configure({"host": host, "port": port})
    second = podgelf.configure({"host": host, "port": port, "level": "WARNING"})

    handlers = logging.getLogger().handlers
    assert first not in handlers
    assert second in handlers
    assert first.appender.released
    assert second.level == logging.WARNING
    assert logging.getLogger().level == logging.WARNING


def test_diagnostics_console_handler(udp_receiver: socket.socket, capsys: pytest.CaptureFixture[str]) -> None:
    host, port = udp_receiver.getsockname()
    podgelf.configure({"host": host, "port": port, "diagnostics": "stderr"})

    podgelf.shutdown()

    assert "Shutdown called" in capsys.readouterr().err


def test_carrier_exception_without_message(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.errors", handler)

    try:
        raise KeyError("sku")
    except KeyError:
        logger.exception(gelf_fields(_order=8))

    (packet,) = _sent(fake_socket)
    assert packet["short_message"] is None
    assert "KeyError" in packet["full_message"]


def test_carrier_is_stripped_for_other_handlers(handler: GELFUDPHandler, fake_socket) -> None:
    logger = _logger("tests.shared", handler)
    stream = io.StringIO()
    logger.addHandler(logging.StreamHandler(stream))

    logger.info(gelf_fields(_order_id=1), "processed order %s", 1)

    assert stream.getvalue() == "processed order 1\n"
    (packet,) = _sent(fake_socket)
    assert packet["short_message"] == "processed order 1"
    assert packet["_order_id"] == 1
