"""Mode processors.

Each processor consumes the line stream one line at a time and renders its
result lines once the stream is exhausted. ``processor_for`` selects the
variant for a resolved configuration.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Protocol

from .errors import InternalError
from .models import FrequencyRow, Mode, ScanConfig
from .patterns import IPV4_RE, compile_ere, severity_pattern

IPS_HEADER = b"COUNT IP"


class ResultProcessor(Protocol):
    """Processor interface: feed lines, then render result lines."""

    def feed(self, line: bytes) -> None:
        """Consume one input line (without its trailing newline)."""
        ...

    def render(self) -> list[bytes]:
        """Return the result stream, one entry per output line."""
        ...


def _ranked(counts: Counter[bytes]) -> list[FrequencyRow]:
    """Sort a frequency table by descending count, ties by token bytes."""
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [FrequencyRow(token=token.decode("ascii"), count=n) for token, n in ordered]


class SeverityCounter:
    """Count ERROR/CRITICAL substring occurrences."""

    def __init__(self, *, case_insensitive: bool = False) -> None:
        self.case_insensitive = case_insensitive
        self._re = severity_pattern(ignore_case=case_insensitive)
        self.counts: Counter[bytes] = Counter()

    def feed(self, line: bytes) -> None:
        for m in self._re.finditer(line):
            token = m.group(0)
            self.counts[token.upper() if self.case_insensitive else token] += 1

    def rows(self) -> list[FrequencyRow]:
        return _ranked(self.counts)

    def render(self) -> list[bytes]:
        return [row.render() for row in self.rows()]


class IpCounter:
    """Count dotted-quad tokens and rank them, optionally keeping the top N."""

    def __init__(self, *, top_n: int | None = None) -> None:
        if top_n is not None and top_n < 0:
            raise ValueError("top_n must be >= 0")
        self.top_n = top_n
        self.counts: Counter[bytes] = Counter()

    def feed(self, line: bytes) -> None:
        self.counts.update(IPV4_RE.findall(line))

    def rows(self) -> list[FrequencyRow]:
        ranked = _ranked(self.counts)
        if self.top_n is not None:
            return ranked[: self.top_n]
        return ranked

    def render(self) -> list[bytes]:
        return [IPS_HEADER, *(row.render() for row in self.rows())]


class LineSelector:
    """Select lines matching a compiled pattern (grep-style substring search)."""

    def __init__(self, pattern: re.Pattern[bytes], *, unique: bool = False) -> None:
        self.pattern = pattern
        self.unique = unique
        self._lines: list[bytes] = []
        self._seen: set[bytes] = set()

    def feed(self, line: bytes) -> None:
        if not self.pattern.search(line):
            return
        if self.unique:
            self._seen.add(line)
        else:
            self._lines.append(line)

    def selected(self) -> list[bytes]:
        # Unique mode drops encounter order in favour of byte-wise sorting.
        if self.unique:
            return sorted(self._seen)
        return list(self._lines)

    def render(self) -> list[bytes]:
        return self.selected()


def processor_for(config: ScanConfig) -> ResultProcessor:
    """Build the processor for the configured mode.

    Grep patterns are compiled here, so a malformed pattern fails before any
    input is read.
    """
    if config.mode == Mode.ERRORS:
        return SeverityCounter(case_insensitive=config.case_insensitive)
    if config.mode == Mode.IPS:
        return IpCounter(top_n=config.top_n)
    if config.mode == Mode.GREP:
        pattern = compile_ere(config.pattern or "", ignore_case=config.case_insensitive)
        return LineSelector(pattern, unique=config.unique)
    raise InternalError(f"unknown mode {config.mode!r}")
