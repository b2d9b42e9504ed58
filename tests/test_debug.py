"""Tests for the --debug escape token dump."""

from __future__ import annotations

import io

from unescaper.debug import dump_tokens
from unescaper.resolver import scan
from unescaper.tokens import Dialect


class TestDumpTokens:
    def test_header_counts_tokens(self) -> None:
        buf = io.StringIO()
        dump_tokens(scan(r"\n\t", Dialect.ASCII), Dialect.ASCII, file=buf)
        assert buf.getvalue().splitlines()[0] == "Escapes (ascii): 2"

    def test_token_line(self) -> None:
        buf = io.StringIO()
        dump_tokens(scan(r"ab\u{e9}", Dialect.UNICODE), Dialect.UNICODE, file=buf)
        line = buf.getvalue().splitlines()[1]
        assert line == "  1:3 [2:8] UNICODE_SCALAR '\\\\u{e9}' -> C3 A9"

    def test_empty(self) -> None:
        buf = io.StringIO()
        dump_tokens([], Dialect.BYTE, file=buf)
        assert buf.getvalue() == "Escapes (byte): 0\n"
