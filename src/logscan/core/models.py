"""Core data models for log scanning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Mode(str, Enum):
    """Processing strategy selected once per run."""

    ERRORS = "errors"
    IPS = "ips"
    GREP = "grep"


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Resolved invocation options, built once and passed explicitly."""

    mode: Mode = Mode.ERRORS
    files: tuple[Path, ...] = ()  # empty means read standard input
    pattern: str | None = None
    top_n: int | None = None
    out_path: Path | None = None
    case_insensitive: bool = False
    unique: bool = False


@dataclass(frozen=True, slots=True)
class FrequencyRow:
    """One row of a frequency table (matched token + occurrence count)."""

    token: str
    count: int

    def render(self) -> bytes:
        return f"{self.count} {self.token}".encode("ascii")
