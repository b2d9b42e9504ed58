"""Dialects, escape token data structures, and hex digit helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Dialect(Enum):
    ASCII = auto()  # \xHH up to 0x7F
    BYTE = auto()  # \xHH up to 0xFF
    UNICODE = auto()  # adds \u{H..H}
    QUOTE = auto()  # adds \' and \"


class EscapeKind(Enum):
    SIMPLE = auto()  # \n \t \r \\ \0
    HEX_BYTE = auto()  # \xHH
    UNICODE_SCALAR = auto()  # \u{H..H}
    QUOTE = auto()  # \' \"


@dataclass(frozen=True, slots=True)
class DialectRules:
    """Escape kinds and numeric ceilings legal under one dialect."""

    hex_ceiling: int
    unicode: bool = False
    quotes: bool = False


DIALECT_RULES: dict[Dialect, DialectRules] = {
    Dialect.ASCII: DialectRules(hex_ceiling=0x7F),
    Dialect.BYTE: DialectRules(hex_ceiling=0xFF),
    Dialect.UNICODE: DialectRules(hex_ceiling=0x7F, unicode=True),
    Dialect.QUOTE: DialectRules(hex_ceiling=0x7F, quotes=True),
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position (end offset exclusive)."""

    start: Position
    end: Position

    def __len__(self) -> int:
        return self.end.offset - self.start.offset


@dataclass(frozen=True, slots=True)
class EscapeToken:
    """A recognised escape with its resolved bytes and original source text."""

    kind: EscapeKind
    value: bytes
    raw: str
    span: Span


# Simple escapes shared by every dialect, mapped to their literal byte.
SIMPLE_ESCAPES: dict[bytes, bytes] = {
    b"n": b"\n",
    b"t": b"\t",
    b"r": b"\r",
    b"\\": b"\\",
    b"0": b"\0",
}

QUOTE_ESCAPES: dict[bytes, bytes] = {
    b"'": b"'",
    b'"': b'"',
}

_HEX_VALUES = {ch: int(ch, 16) for ch in "0123456789abcdefABCDEF"}


def _as_char(ch: str | bytes) -> str:
    if isinstance(ch, bytes):
        return ch.decode("latin-1")
    return ch


def hex_digit_value(ch: str | bytes) -> int | None:
    """Return the value (0-15) of a single hex digit, or None if ch is not one."""
    return _HEX_VALUES.get(_as_char(ch))


def is_hex_digit(ch: str | bytes) -> bool:
    """Return True if ch is a hexadecimal digit."""
    return hex_digit_value(ch) is not None
