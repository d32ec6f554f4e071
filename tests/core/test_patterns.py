from __future__ import annotations

import pytest

from logscan.core.errors import PatternError
from logscan.core.patterns import IPV4_RE, compile_ere, severity_pattern, translate_ere


def test_translate_ere_expands_posix_classes() -> None:
    assert translate_ere("[[:digit:]]+") == "[0-9]+"
    assert translate_ere("[^[:space:]x]") == "[^ \\t\\n\\r\\f\\vx]"


def test_translate_ere_leading_bracket_is_literal() -> None:
    assert translate_ere("[]a]") == "[\\]a]"
    assert translate_ere("[^]a]") == "[^\\]a]"


def test_translate_ere_backslash_inside_bracket_is_literal() -> None:
    assert translate_ere(r"[\d]") == r"[\\d]"
    assert compile_ere(r"[\d]").search(b"back\\slash")
    assert not compile_ere(r"[\d]").search(b"7")


def test_translate_ere_leaves_plain_syntax_alone() -> None:
    assert translate_ere(r"(foo|bar)+\.log$") == r"(foo|bar)+\.log$"


def test_compile_ere_posix_class_matches() -> None:
    pat = compile_ere("[[:upper:]]{3}")
    assert pat.search(b"code ABC here")
    assert not pat.search(b"code abc here")


def test_compile_ere_ignore_case() -> None:
    assert compile_ere("timeout", ignore_case=True).search(b"UPSTREAM TIMEOUT")
    assert not compile_ere("timeout").search(b"UPSTREAM TIMEOUT")


@pytest.mark.parametrize("pattern", ["(", "[abc", "[[:nope:]]", "a**", "[[:alpha"])
def test_compile_ere_invalid_raises(pattern: str) -> None:
    with pytest.raises(PatternError):
        compile_ere(pattern)


def test_ipv4_pattern_has_no_octet_bounds() -> None:
    line = b"from 999.999.999.999 to 10.0.0.1, version 1.2.3"
    assert IPV4_RE.findall(line) == [b"999.999.999.999", b"10.0.0.1"]


def test_severity_pattern_case_modes() -> None:
    assert severity_pattern(ignore_case=False).findall(b"error ERROR Critical") == [b"ERROR"]
    assert severity_pattern(ignore_case=True).findall(b"error ERROR Critical") == [
        b"error",
        b"ERROR",
        b"Critical",
    ]
