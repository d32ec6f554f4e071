"""Input collection.

Produces the line stream from named files (concatenated in order, as one byte
stream) or from standard input.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator, Sequence
from pathlib import Path
from typing import BinaryIO

import aiofiles
from aiofiles.threadpool import wrap

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
STDIN_PROMPT = "reading from STDIN... (Ctrl+D to end)"


async def _iter_file_chunks(paths: Sequence[Path], *, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield raw chunks of each file in turn."""
    for path in paths:
        logger.debug("reading %s", path)
        async with aiofiles.open(path, "rb") as f:
            while True:
                chunk = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk


async def _iter_stream_chunks(stream: BinaryIO, *, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield raw chunks of an already-open binary stream (left open)."""
    if stream.isatty():
        logger.info(STDIN_PROMPT)
    af = wrap(stream)
    while True:
        chunk = await af.read(chunk_size)
        if not chunk:
            break
        yield chunk


async def iter_lines(
    paths: Sequence[Path],
    *,
    stdin: BinaryIO | None = None,
    chunk_size: int = CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """Yield input lines without their trailing newline.

    Files are read only when ``paths`` is non-empty; otherwise ``stdin`` (or
    the process's standard input) is the sole source. A final line lacking a
    newline is still yielded.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")

    if paths:
        chunks = _iter_file_chunks(paths, chunk_size=chunk_size)
    else:
        chunks = _iter_stream_chunks(stdin or sys.stdin.buffer, chunk_size=chunk_size)

    # Pieces of the current unterminated line; joined once, when it ends.
    parts: list[bytes] = []
    async for chunk in chunks:
        pieces = chunk.split(b"\n")
        if len(pieces) == 1:
            parts.append(chunk)
            continue
        parts.append(pieces[0])
        yield b"".join(parts)
        for line in pieces[1:-1]:
            yield line
        parts = [pieces[-1]] if pieces[-1] else []

    if parts:
        yield b"".join(parts)
