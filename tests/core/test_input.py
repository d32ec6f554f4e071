from __future__ import annotations

import io
from pathlib import Path

import pytest

from logscan.core.input import STDIN_PROMPT, iter_lines


async def _collect(paths, **kwargs) -> list[bytes]:
    return [line async for line in iter_lines(paths, **kwargs)]


class _TtyBytes(io.BytesIO):
    def isatty(self) -> bool:
        return True


@pytest.mark.asyncio
async def test_iter_lines_reads_files_in_order(tmp_path: Path, write_bytes) -> None:
    a = tmp_path / "a.log"
    b = tmp_path / "b.log"
    write_bytes(a, [b"first", b"second"])
    write_bytes(b, [b"third"])

    assert await _collect([b, a]) == [b"third", b"first", b"second"]


@pytest.mark.asyncio
async def test_iter_lines_concatenates_like_one_stream(tmp_path: Path) -> None:
    a = tmp_path / "a.log"
    b = tmp_path / "b.log"
    a.write_bytes(b"one\ntwo")
    b.write_bytes(b"three\nfour")

    # "two" has no newline, so it runs into the next file's first line.
    assert await _collect([a, b]) == [b"one", b"twothree", b"four"]


@pytest.mark.asyncio
async def test_iter_lines_small_chunks_match_default(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    path.write_bytes(b"alpha\n\nbeta gamma\ndelta")

    expected = [b"alpha", b"", b"beta gamma", b"delta"]
    assert await _collect([path]) == expected
    assert await _collect([path], chunk_size=3) == expected


@pytest.mark.asyncio
async def test_iter_lines_keeps_carriage_returns(tmp_path: Path) -> None:
    path = tmp_path / "crlf.log"
    path.write_bytes(b"a\r\nb\r\n")
    assert await _collect([path]) == [b"a\r", b"b\r"]


@pytest.mark.asyncio
async def test_iter_lines_reads_stdin_when_no_files() -> None:
    stdin = io.BytesIO(b"x 1\ny 2\nz 3")
    assert await _collect([], stdin=stdin) == [b"x 1", b"y 2", b"z 3"]
    assert not stdin.closed


@pytest.mark.asyncio
async def test_iter_lines_empty_stdin() -> None:
    assert await _collect([], stdin=io.BytesIO(b"")) == []


@pytest.mark.asyncio
async def test_iter_lines_prompts_for_terminal_stdin(logscan_caplog) -> None:
    assert await _collect([], stdin=_TtyBytes(b"typed\n")) == [b"typed"]
    assert STDIN_PROMPT in logscan_caplog.text


@pytest.mark.asyncio
async def test_iter_lines_no_prompt_for_piped_stdin(logscan_caplog) -> None:
    await _collect([], stdin=io.BytesIO(b"piped\n"))
    assert STDIN_PROMPT not in logscan_caplog.text


@pytest.mark.asyncio
async def test_iter_lines_ignores_stdin_when_files_given(tmp_path: Path, write_bytes) -> None:
    path = tmp_path / "app.log"
    write_bytes(path, [b"from file"])
    assert await _collect([path], stdin=io.BytesIO(b"from stdin\n")) == [b"from file"]


@pytest.mark.asyncio
async def test_iter_lines_rejects_bad_chunk_size(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        await _collect([tmp_path / "x.log"], chunk_size=0)


@pytest.mark.asyncio
async def test_iter_lines_long_line_across_many_chunks(tmp_path: Path) -> None:
    path = tmp_path / "big.log"
    long_line = b"x" * (1024 * 1024) + b" ERROR"
    path.write_bytes(long_line + b"\nshort\n" + long_line)

    assert await _collect([path], chunk_size=1024) == [long_line, b"short", long_line]


@pytest.mark.asyncio
async def test_iter_lines_newline_on_chunk_boundary() -> None:
    stdin = io.BytesIO(b"abc\ndef\n\n")
    assert await _collect([], stdin=stdin, chunk_size=4) == [b"abc", b"def", b""]
