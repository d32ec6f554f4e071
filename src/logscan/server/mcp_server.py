"""MCP server entrypoint (stdio transport).

Exposes the three scan modes as tools over named local files.

Run locally (stdio):
    python -m logscan.server.mcp_server
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from logscan.tools.scan import count_errors_impl, count_ips_impl, grep_logs_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure logging on stderr; stdout carries the MCP transport."""
    level_name = os.getenv("LOGSCAN_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("logscan", json_response=True)


@mcp.tool()
async def count_errors(log_paths: list[str], case_insensitive: bool = False) -> dict[str, Any]:
    """Count ERROR and CRITICAL occurrences across log files.

    Parameters
    ----------
    log_paths:
        Local files, read in order as one stream.
    case_insensitive:
        Match any case and fold tokens to upper case before counting.

    Returns
    -------
    dict:
        {"mode": "errors", "total": int, "items": [{"token": str, "count": int}]}
    """
    return await count_errors_impl(log_paths=log_paths, case_insensitive=case_insensitive)


@mcp.tool()
async def count_ips(log_paths: list[str], top: int | None = None) -> dict[str, Any]:
    """Rank IPv4 addresses by frequency across log files.

    Parameters
    ----------
    log_paths:
        Local files, read in order as one stream.
    top:
        Keep only the N most frequent addresses.

    Returns
    -------
    dict:
        {"mode": "ips", "total": int, "items": [{"token": str, "count": int}]}
    """
    return await count_ips_impl(log_paths=log_paths, top=top)


@mcp.tool()
async def grep_logs(
    log_paths: list[str],
    pattern: str,
    case_insensitive: bool = False,
    unique: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Return lines matching a POSIX extended regular expression.

    Parameters
    ----------
    log_paths:
        Local files, read in order as one stream.
    pattern:
        POSIX ERE applied as a substring search to each line.
    case_insensitive:
        Ignore case while matching.
    unique:
        Drop duplicate lines and sort the rest byte-wise.
    limit:
        Maximum number of lines returned (hard-capped in the implementation).

    Returns
    -------
    dict:
        {"count": int, "truncated": bool, "lines": list[str]}
    """
    return await grep_logs_impl(
        log_paths=log_paths,
        pattern=pattern,
        case_insensitive=case_insensitive,
        unique=unique,
        limit=limit,
    )


def main() -> None:
    """Start the MCP server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
