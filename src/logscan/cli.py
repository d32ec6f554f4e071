from __future__ import annotations

import asyncio
import getopt
import logging
import os
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path

from logscan.core.errors import LogscanError, UsageError
from logscan.core.models import Mode, ScanConfig
from logscan.core.scan_service import run_scan, validate_config

PROG = "logscan"

USAGE = f"""\
Usage:
  {PROG} [-f FILE ...] [--errors | --ips | --grep REGEX] [-t N] [-o OUTFILE] [-i] [-u] [-h]

Modes (choose one; default is --errors unless --grep/-e is given):
  --errors            Count ERROR and CRITICAL occurrences (case-insensitive with -i).
  --ips               Extract IPv4 addresses and rank them by frequency (-t N for top N).
  --grep REGEX        Print lines matching REGEX (POSIX ERE). Add -u for unique lines.

Input:
  -f FILE             Input file; repeat for several (read in order). Default: STDIN.

Modifiers:
  -e REGEX            Same as --grep REGEX.
  -t N                Keep only the top N rows (--ips).
  -o OUTFILE          Write results to OUTFILE (created or overwritten).
  -i                  Case-insensitive matching (--errors, --grep).
  -u                  Unique, sorted lines (--grep).
  -h, --help          Show this help and exit.

Examples:
  {PROG} -f /var/log/syslog --errors
  {PROG} -f access.log --ips -t 10
  {PROG} -f app.log --grep 'timeout' -i -u -o timeouts.txt
"""

_SHORT_OPTIONS = "f:e:t:o:iuh"
_TOP_N_RE = re.compile(r"[0-9]+")

logger = logging.getLogger(PROG)


class HelpRequested(Exception):
    """Raised by -h/--help to stop parsing immediately."""


@dataclass
class _Options:
    """Raw option values collected across both parsing phases."""

    errors: bool = False
    ips: bool = False
    grep: bool = False
    pattern: str | None = None
    files: list[Path] = field(default_factory=list)
    top_n: str | None = None
    out_path: Path | None = None
    case_insensitive: bool = False
    unique: bool = False


def _configure_logging(level: int = logging.INFO) -> None:
    """Route every diagnostic to stderr, prefixed with the program name."""
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(f"[{PROG}] %(message)s"))
    logger.addHandler(handler)


def _scan_long_options(argv: Sequence[str], opts: _Options) -> list[str]:
    """First phase: pull the long options out of argv, wherever they appear.

    The token after --grep is its value whatever it looks like. Returns the
    remaining arguments for the short-option phase.
    """
    rest: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--errors":
            opts.errors = True
        elif arg == "--ips":
            opts.ips = True
        elif arg == "--grep" or arg.startswith("--grep="):
            value = arg.partition("=")[2] if "=" in arg else next(args, "")
            if not value:
                raise UsageError("--grep requires a REGEX")
            opts.grep = True
            opts.pattern = value
        elif arg == "--help":
            raise HelpRequested()
        elif arg.startswith("--"):
            raise UsageError(f"unknown option '{arg}'", suggest_help=True)
        else:
            rest.append(arg)
    return rest


def _scan_short_options(argv: Sequence[str], opts: _Options) -> None:
    """Second phase: getopt-style short options; values may start with '-'."""
    try:
        parsed, operands = getopt.getopt(list(argv), _SHORT_OPTIONS)
    except getopt.GetoptError as e:
        raise UsageError(str(e), suggest_help=True) from e
    if operands:
        raise UsageError(f"unexpected argument '{operands[0]}'", suggest_help=True)

    for flag, value in parsed:
        if flag == "-h":
            raise HelpRequested()
        if flag == "-f":
            opts.files.append(Path(value))
        elif flag == "-e":
            opts.grep = True
            opts.pattern = value
        elif flag == "-t":
            opts.top_n = value
        elif flag == "-o":
            opts.out_path = Path(value)
        elif flag == "-i":
            opts.case_insensitive = True
        elif flag == "-u":
            opts.unique = True


def _resolve_mode(opts: _Options) -> Mode:
    selected = [
        mode
        for mode, on in ((Mode.ERRORS, opts.errors), (Mode.IPS, opts.ips), (Mode.GREP, opts.grep))
        if on
    ]
    if len(selected) > 1:
        raise UsageError("choose only one mode among --errors, --ips, --grep")
    return selected[0] if selected else Mode.ERRORS


def _parse_top_n(raw: str | None) -> int | None:
    if raw is None:
        return None
    if not _TOP_N_RE.fullmatch(raw):
        raise UsageError("-t N expects an integer")
    return int(raw)


def resolve_config(argv: Sequence[str]) -> ScanConfig:
    """Parse and validate argv into a ScanConfig.

    Raises HelpRequested for -h/--help, UsageError/InputError otherwise.
    """
    opts = _Options()
    rest = _scan_long_options(argv, opts)
    # -e is read after the long options, so it overrides --grep; not a conflict.
    _scan_short_options(rest, opts)

    config = ScanConfig(
        mode=_resolve_mode(opts),
        files=tuple(opts.files),
        pattern=opts.pattern,
        out_path=opts.out_path,
        case_insensitive=opts.case_insensitive,
        unique=opts.unique,
    )
    validate_config(config)
    return replace(config, top_n=_parse_top_n(opts.top_n))


def main(argv: Sequence[str] | None = None) -> int:
    _configure_logging()
    try:
        config = resolve_config(sys.argv[1:] if argv is None else argv)
        logger.debug("resolved %s", config)
        asyncio.run(run_scan(config))
    except HelpRequested:
        sys.stdout.write(USAGE)
        sys.stdout.flush()
        return 0
    except UsageError as e:
        logger.error("error: %s", e)
        if e.suggest_help:
            logger.error("Try '%s -h'", PROG)
        return e.exit_code
    except LogscanError as e:
        logger.error("error: %s", e)
        return e.exit_code
    except KeyboardInterrupt:
        return 130
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); silence the flush at exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
