"""Compiled matchers for the three scan modes.

All patterns operate on raw bytes so that input is never decoded.
"""

from __future__ import annotations

import os
import re

from .errors import PatternError

SEVERITY_RE = re.compile(rb"ERROR|CRITICAL")
SEVERITY_RE_NOCASE = re.compile(rb"ERROR|CRITICAL", re.IGNORECASE)

# No octet bounds check: 999.999.999.999 is accepted.
IPV4_RE = re.compile(rb"(?:[0-9]{1,3}\.){3}[0-9]{1,3}")

_POSIX_CLASSES: dict[str, str] = {
    "alnum": "0-9A-Za-z",
    "alpha": "A-Za-z",
    "blank": " \\t",
    "cntrl": "\\x00-\\x1f\\x7f",
    "digit": "0-9",
    "graph": "!-~",
    "lower": "a-z",
    "print": " -~",
    "punct": "!-/:-@\\[-`{-~",
    "space": " \\t\\n\\r\\f\\v",
    "upper": "A-Z",
    "xdigit": "0-9A-Fa-f",
}


def severity_pattern(*, ignore_case: bool) -> re.Pattern[bytes]:
    """Return the ERROR/CRITICAL matcher for the requested case mode."""
    return SEVERITY_RE_NOCASE if ignore_case else SEVERITY_RE


def _translate_bracket(pattern: str, start: int) -> tuple[str, int]:
    """Translate the bracket expression opening at ``start``.

    Returns the Python set and the index just past the closing ``]``.
    """
    out = ["["]
    i = start + 1
    n = len(pattern)
    if i < n and pattern[i] == "^":
        out.append("^")
        i += 1
    if i < n and pattern[i] == "]":
        out.append("\\]")
        i += 1

    while i < n and pattern[i] != "]":
        if pattern.startswith("[:", i):
            end = pattern.find(":]", i + 2)
            if end == -1:
                raise PatternError(f"unterminated character class in {pattern!r}")
            name = pattern[i + 2 : end]
            try:
                out.append(_POSIX_CLASSES[name])
            except KeyError as e:
                raise PatternError(f"invalid character class: {name}") from e
            i = end + 2
            continue

        ch = pattern[i]
        # Backslash and '[' are literal inside a POSIX bracket expression.
        out.append("\\" + ch if ch in "\\[" else ch)
        i += 1

    if i >= n:
        raise PatternError(f"unmatched [ in {pattern!r}")
    out.append("]")
    return "".join(out), i + 1


def translate_ere(pattern: str) -> str:
    """Rewrite a POSIX extended regular expression into Python ``re`` syntax."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\" and i + 1 < n:
            out.append(pattern[i : i + 2])
            i += 2
        elif ch == "[":
            chunk, i = _translate_bracket(pattern, i)
            out.append(chunk)
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def compile_ere(pattern: str, *, ignore_case: bool = False) -> re.Pattern[bytes]:
    """Compile a POSIX ERE for substring search over byte lines."""
    translated = translate_ere(pattern)
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(os.fsencode(translated), flags)
    except re.error as e:
        raise PatternError(f"invalid regular expression {pattern!r}: {e}") from e
