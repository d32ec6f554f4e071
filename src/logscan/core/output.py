"""Output sink: standard output or a file replaced in one step."""

from __future__ import annotations

import logging
import os
import stat
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

import aiofiles
import aiofiles.os

from .errors import OutputError

logger = logging.getLogger(__name__)


def _payload(lines: Sequence[bytes]) -> bytes:
    return b"".join(line + b"\n" for line in lines)


def _temp_path(target: Path) -> Path:
    """Sibling temp file, so the final rename stays on one filesystem."""
    return target.with_name(f".{target.name}.{os.getpid()}.tmp")


async def _stat_or_none(path: Path) -> os.stat_result | None:
    try:
        return await aiofiles.os.stat(path)
    except FileNotFoundError:
        return None


async def _write_in_place(out_path: Path, payload: bytes) -> None:
    """Devices, FIFOs and other non-regular targets are opened and written directly."""
    async with aiofiles.open(out_path, "wb") as f:
        await f.write(payload)


async def _write_replacing(target: Path, payload: bytes, st: os.stat_result | None) -> None:
    tmp = _temp_path(target)
    try:
        async with aiofiles.open(tmp, "wb") as f:
            await f.write(payload)
        if st is not None:
            os.chmod(tmp, stat.S_IMODE(st.st_mode))
        await aiofiles.os.replace(tmp, target)
    except OSError:
        if await aiofiles.os.path.exists(tmp):
            await aiofiles.os.remove(tmp)
        raise


async def _write_file(out_path: Path, payload: bytes) -> None:
    try:
        st = await _stat_or_none(out_path)
        if st is not None and not stat.S_ISREG(st.st_mode):
            await _write_in_place(out_path, payload)
        else:
            # Symlinks are followed so the link survives and its target is updated.
            target = Path(os.path.realpath(out_path))
            await _write_replacing(target, payload, st)
    except OSError as e:
        raise OutputError(f"cannot write {out_path}: {e.strerror or e}") from e


async def write_results(
    lines: Sequence[bytes],
    *,
    out_path: Path | None = None,
    stdout: BinaryIO | None = None,
) -> None:
    """Write result lines verbatim, newline-terminated.

    With ``out_path`` naming a regular file (or nothing yet), the file is
    created or overwritten only once the full payload is on disk, keeping its
    permission bits; a failed write leaves any existing file untouched.
    Other targets such as ``/dev/null`` or a FIFO are written in place.
    """
    payload = _payload(lines)

    if out_path is None:
        stream = stdout or sys.stdout.buffer
        stream.write(payload)
        stream.flush()
        return

    await _write_file(out_path, payload)
    logger.info("wrote results to: %s", out_path)
