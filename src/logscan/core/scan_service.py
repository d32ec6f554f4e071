"""Scan orchestration: validate, collect, process, emit.

This module is the main integration point shared by the CLI and the MCP tools.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

from .errors import InputError, UsageError
from .input import iter_lines
from .models import Mode, ScanConfig
from .output import write_results
from .processors import ResultProcessor, processor_for

logger = logging.getLogger(__name__)


def validate_config(config: ScanConfig) -> None:
    """Check a configuration before any input is read."""
    for path in config.files:
        if not path.is_file():
            raise InputError(f"file not found: {path}")
    if config.mode == Mode.GREP and not config.pattern:
        raise UsageError("--grep requires a REGEX (use -e REGEX or --grep REGEX)")
    if config.top_n is not None and config.top_n < 0:
        raise UsageError("-t N expects an integer")


async def scan(config: ScanConfig, *, stdin: BinaryIO | None = None) -> ResultProcessor:
    """Feed the whole line stream through the configured processor."""
    validate_config(config)
    processor = processor_for(config)
    logger.debug("mode=%s sources=%s", config.mode.value, [str(p) for p in config.files] or "stdin")

    lines = 0
    try:
        async for line in iter_lines(config.files, stdin=stdin):
            processor.feed(line)
            lines += 1
    except OSError as e:
        raise InputError(f"cannot read input: {e}") from e

    logger.debug("scanned %d lines", lines)
    return processor


async def run_scan(
    config: ScanConfig,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
) -> list[bytes]:
    """Run one full scan and write its result stream; return what was written."""
    processor = await scan(config, stdin=stdin)
    result = processor.render()
    await write_results(result, out_path=config.out_path, stdout=stdout)
    return result
