from __future__ import annotations

import io
import logging
import sys
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_log() -> Callable[[Path], None]:
    def _write(path: Path) -> None:
        path.write_text(
            "\n".join(
                [
                    "2025-12-30T08:12:01Z [INFO] service started from 10.0.0.1",
                    "2025-12-30T08:12:03Z [ERROR] upstream timeout peer=10.0.0.2",
                    "2025-12-30T08:12:04Z [ERROR] retry failed peer=10.0.0.2 via 10.0.0.1",
                    "2025-12-30T08:12:05Z [CRITICAL] database unavailable ERROR=db",
                    "2025-12-30T08:12:06Z [INFO] error budget at 92% from 192.168.1.20",
                ]
            )
            + "\n",
            encoding="utf-8",
        )

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        path.write_bytes(b"".join(line + b"\n" for line in lines))

    return _write


@pytest.fixture
def feed_stdin(monkeypatch: pytest.MonkeyPatch) -> Callable[[bytes], None]:
    """Replace the process's standard input with the given bytes."""

    def _feed(data: bytes) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))

    return _feed


@pytest.fixture
def logscan_caplog(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch):
    """caplog that also sees records from the package logger once the CLI detached it."""
    monkeypatch.setattr(logging.getLogger("logscan"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="logscan")
    return caplog


@pytest.fixture(autouse=True)
def _reset_logscan_logger():
    """Undo the CLI's handler setup so later tests don't log to a closed capture stream."""
    yield
    log = logging.getLogger("logscan")
    log.handlers.clear()
    log.propagate = True
    log.setLevel(logging.NOTSET)
