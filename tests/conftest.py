from __future__ import annotations

import logging
import os
import socket
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Callable, Iterator, List, Tuple

import pytest

from podgelf.config import loader
from podgelf.core.manager import GLOBAL_MANAGER


class SyncExecutor(Executor):
    """Run submitted work immediately on the calling thread."""

    def __init__(self) -> None:
        self.submitted = 0
        self.shutdown_calls = 0

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:  # type: ignore[override]
        self.submitted += 1
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:  # type: ignore[override]
        self.shutdown_calls += 1


class FakeSocket:
    """Stand-in for a UDP socket recording what would have been sent."""

    def __init__(self, error: OSError | None = None) -> None:
        self.sent: List[Tuple[bytes, Tuple[str, int]]] = []
        self.close_calls = 0
        self.error = error

    def sendto(self, payload: bytes, address: Tuple[str, int]) -> int:
        if self.error is not None:
            raise self.error
        self.sent.append((payload, address))
        return len(payload)

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    user_dir = tmp_path / "user-config"
    monkeypatch.setattr(loader, "user_config_dir", lambda _: str(user_dir))
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("PODGELF__"):
            monkeypatch.delenv(key)
    return workdir


@pytest.fixture(autouse=True)
def reset_podgelf() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    GLOBAL_MANAGER.shutdown()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def sync_executor() -> SyncExecutor:
    return SyncExecutor()


@pytest.fixture
def fake_socket() -> FakeSocket:
    return FakeSocket()


@pytest.fixture
def udp_receiver() -> Iterator[socket.socket]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    try:
        yield sock
    finally:
        sock.close()
