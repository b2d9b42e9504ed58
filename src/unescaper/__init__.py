"""Resolve Rust-style backslash escapes in literal text."""

from __future__ import annotations

from unescaper.errors import ErrorKind, EscapeError
from unescaper.resolver import resolve, resolve_bytes, scan
from unescaper.tokens import Dialect, EscapeKind, EscapeToken

__version__ = "0.1.0"

__all__ = [
    "Dialect",
    "ErrorKind",
    "EscapeError",
    "EscapeKind",
    "EscapeToken",
    "escape_ascii",
    "escape_bytes",
    "escape_quotes",
    "escape_unicode",
    "resolve",
    "resolve_bytes",
    "scan",
]


def escape_ascii(source: str | bytes, *, strict: bool = False) -> str:
    """Resolve ASCII escapes: simple escapes and \\xHH up to 0x7F."""
    return resolve(source, Dialect.ASCII, strict=strict)


def escape_bytes(source: str | bytes, *, strict: bool = False) -> str:
    """Resolve byte escapes: like escape_ascii, but \\xHH may go up to 0xFF.

    The output must still be valid UTF-8; use resolve_bytes() for raw bytes.
    """
    return resolve(source, Dialect.BYTE, strict=strict)


def escape_unicode(source: str | bytes, *, strict: bool = False) -> str:
    """Resolve unicode escapes (\\u{H..H}) as well as the ASCII forms."""
    return resolve(source, Dialect.UNICODE, strict=strict)


def escape_quotes(source: str | bytes, *, strict: bool = False) -> str:
    """Resolve quote escapes (\\' and \\") as well as the ASCII forms."""
    return resolve(source, Dialect.QUOTE, strict=strict)
