"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any, cast

from logscan.core.models import Mode, ScanConfig
from logscan.core.processors import IpCounter, LineSelector, SeverityCounter
from logscan.core.scan_service import scan

from .models import FrequencyItem, FrequencyReport, GrepReport

DEFAULT_LIMIT = 200
HARD_LIMIT = 5000


def _paths(log_paths: Sequence[str]) -> tuple[Path, ...]:
    """Turn tool arguments into input paths; stdin is reserved for the transport."""
    paths = tuple(Path(p).expanduser() for p in log_paths if p and p.strip())
    if not paths:
        raise ValueError("log_paths must name at least one file")
    return paths


def _frequency_report(mode: Mode, processor: SeverityCounter | IpCounter) -> dict[str, Any]:
    report = FrequencyReport(
        mode=mode.value,
        total=len(processor.counts),
        items=[FrequencyItem(token=row.token, count=row.count) for row in processor.rows()],
    )
    return report.model_dump()


async def count_errors_impl(
    *,
    log_paths: Sequence[str],
    case_insensitive: bool = False,
) -> dict[str, Any]:
    """Implementation for the `count_errors` MCP tool."""
    config = ScanConfig(mode=Mode.ERRORS, files=_paths(log_paths), case_insensitive=case_insensitive)
    processor = cast(SeverityCounter, await scan(config))
    return _frequency_report(Mode.ERRORS, processor)


async def count_ips_impl(
    *,
    log_paths: Sequence[str],
    top: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `count_ips` MCP tool."""
    if top is not None and top < 0:
        raise ValueError("top must be >= 0")
    config = ScanConfig(mode=Mode.IPS, files=_paths(log_paths), top_n=top)
    processor = cast(IpCounter, await scan(config))
    return _frequency_report(Mode.IPS, processor)


async def grep_logs_impl(
    *,
    log_paths: Sequence[str],
    pattern: str,
    case_insensitive: bool = False,
    unique: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `grep_logs` MCP tool.

    Notes
    -----
    - limit defaults to DEFAULT_LIMIT and is capped at HARD_LIMIT
    - lines are decoded as UTF-8 with replacement characters
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    limit = min(limit, HARD_LIMIT)

    config = ScanConfig(
        mode=Mode.GREP,
        files=_paths(log_paths),
        pattern=pattern,
        case_insensitive=case_insensitive,
        unique=unique,
    )
    processor = cast(LineSelector, await scan(config))

    selected = processor.selected()
    lines = [line.decode("utf-8", errors="replace") for line in selected[:limit]]
    return GrepReport(count=len(lines), truncated=len(selected) > limit, lines=lines).model_dump()
