"""Escape resolver: replaces backslash escapes with the bytes they denote."""

from __future__ import annotations

from unescaper.errors import ErrorKind, EscapeError
from unescaper.tokens import (
    DIALECT_RULES,
    QUOTE_ESCAPES,
    SIMPLE_ESCAPES,
    Dialect,
    EscapeKind,
    EscapeToken,
    Position,
    Span,
    hex_digit_value,
)

_INTRODUCER = b"\\"
_MAX_UNICODE_DIGITS = 6
_MAX_SCALAR = 0x10FFFF


class Resolver:
    """Scan a source buffer once, left to right, splicing resolved escapes.

    The source is never mutated: verbatim spans are copied into a fresh
    output buffer and each escape's resolved bytes are appended in its place.
    """

    def __init__(
        self,
        source: str | bytes | bytearray,
        dialect: Dialect = Dialect.UNICODE,
        *,
        strict: bool = False,
    ) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8", errors="surrogatepass")
        self._source = bytes(source)
        self._text = self._source.decode("utf-8", errors="replace")
        self._dialect = dialect
        self._rules = DIALECT_RULES[dialect]
        self._strict = strict
        self._pos = 0
        self._tokens: list[EscapeToken] = []
        self._mark = Position(1, 1, 0)

    @property
    def tokens(self) -> list[EscapeToken]:
        """Escape tokens recognised by the last call to resolve(), in source order."""
        return list(self._tokens)

    def resolve(self) -> bytes:
        """Resolve every escape and return the raw output bytes."""
        self._check_source()
        self._pos = 0
        self._tokens = []
        self._mark = Position(1, 1, 0)
        out = bytearray()
        span_start = 0

        while self._pos < len(self._source):
            idx = self._source.find(_INTRODUCER, self._pos)
            if idx == -1:
                break
            self._pos = idx
            token = self._lex_escape()
            if token is None:
                # Introducer stays literal; rescan the following byte fresh
                self._pos += 1
                continue
            out += self._source[span_start : token.span.start.offset]
            out += token.value
            self._tokens.append(token)
            span_start = self._pos

        out += self._source[span_start:]
        return bytes(out)

    def decode(self, data: bytes) -> str:
        """Validate resolver output as UTF-8 and return it as text."""
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            span = self._output_span(exc.start)
            raise EscapeError(
                ErrorKind.INVALID_UTF8,
                f"escaped output is not valid UTF-8 (byte 0x{data[exc.start]:02X})",
                span,
                self._text,
            ) from exc

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _width(self, start: int, end: int) -> int:
        return len(self._source[start:end].decode("utf-8", errors="replace"))

    def _position_at(self, offset: int) -> Position:
        """Return the position of offset, advancing from the last one computed.

        Offsets arrive in increasing order during a scan, so each byte is
        counted once; only an earlier offset restarts from the beginning.
        """
        if offset < self._mark.offset:
            self._mark = Position(1, 1, 0)
        mark = self._mark

        newlines = self._source.count(b"\n", mark.offset, offset)
        if newlines:
            line_start = self._source.rfind(b"\n", mark.offset, offset) + 1
            position = Position(mark.line + newlines, self._width(line_start, offset) + 1, offset)
        else:
            position = Position(mark.line, mark.column + self._width(mark.offset, offset), offset)
        self._mark = position
        return position

    def _span(self, start: int, end: int | None = None) -> Span:
        if end is None:
            end = self._pos
        end = max(end, start + 1)
        return Span(self._position_at(start), self._position_at(end))

    def _peek(self, offset: int = 0) -> bytes:
        idx = self._pos + offset
        return self._source[idx : idx + 1]

    def _char_at(self, offset: int) -> str:
        """Return the (possibly multi-byte) character starting at offset."""
        return self._source[offset : offset + 4].decode("utf-8", errors="ignore")[:1]

    def _error(
        self, kind: ErrorKind, message: str, start: int, end: int | None = None
    ) -> EscapeError:
        return EscapeError(kind, message, self._span(start, end), self._text)

    def _output_span(self, out_offset: int) -> Span:
        """Map an offset in the output buffer back to a source span."""
        shrink = 0
        for token in self._tokens:
            token_out = token.span.start.offset - shrink
            if out_offset < token_out:
                break
            if out_offset < token_out + len(token.value):
                return token.span
            shrink += len(token.span) - len(token.value)
        offset = out_offset + shrink
        return self._span(offset, offset + 1)

    def _check_source(self) -> None:
        try:
            self._source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise self._error(
                ErrorKind.INVALID_UTF8,
                f"source is not valid UTF-8 (byte 0x{self._source[exc.start]:02X})",
                exc.start,
                exc.end,
            ) from exc

    # ------------------------------------------------------------------
    # Escapes
    # ------------------------------------------------------------------

    def _token(self, kind: EscapeKind, value: bytes, start: int) -> EscapeToken:
        raw = self._source[start : self._pos].decode("utf-8")
        return EscapeToken(kind, value, raw, self._span(start))

    def _lex_escape(self) -> EscapeToken | None:
        """Dispatch on the byte after the introducer at the cursor.

        Returns None when the introducer is not the start of an escape under
        the active dialect, leaving the cursor on the introducer.
        """
        start = self._pos
        ch = self._peek(1)

        if not ch:
            # Trailing backslash at end of input
            return None

        if ch in SIMPLE_ESCAPES:
            self._pos += 2
            return self._token(EscapeKind.SIMPLE, SIMPLE_ESCAPES[ch], start)

        if self._rules.quotes and ch in QUOTE_ESCAPES:
            self._pos += 2
            return self._token(EscapeKind.QUOTE, QUOTE_ESCAPES[ch], start)

        if ch == b"x":
            self._pos += 2
            return self._lex_hex_escape(start)

        if ch == b"u" and self._rules.unicode:
            self._pos += 2
            return self._lex_unicode_escape(start)

        if self._strict:
            letter = self._char_at(start + 1)
            raise self._error(
                ErrorKind.UNSUPPORTED_DIALECT_FEATURE,
                f"escape sequence '\\{letter}' is not supported "
                f"in the {self._dialect.name.lower()} dialect",
                start,
                start + 1 + len(letter.encode("utf-8")),
            )
        return None

    def _invalid_digit(self, start: int) -> EscapeError:
        ch = self._char_at(self._pos)
        return self._error(
            ErrorKind.INVALID_HEX_DIGIT,
            f"invalid hex digit {ch!r} in escape sequence",
            start,
            self._pos + len(ch.encode("utf-8")),
        )

    def _lex_hex_escape(self, start: int) -> EscapeToken:
        """Read exactly two hex digits after '\\x'."""
        value = 0
        for i in range(2):
            ch = self._peek()
            if not ch:
                raise self._error(
                    ErrorKind.INCOMPLETE_HEX_ESCAPE,
                    f"incomplete escape: expected 2 hex digits, got {i}",
                    start,
                )
            digit = hex_digit_value(ch)
            if digit is None:
                raise self._invalid_digit(start)
            value = value * 16 + digit
            self._pos += 1

        ceiling = self._rules.hex_ceiling
        if value > ceiling:
            raise self._error(
                ErrorKind.HEX_VALUE_OUT_OF_RANGE,
                f"hex escape value 0x{value:02X} exceeds 0x{ceiling:02X} "
                f"in the {self._dialect.name.lower()} dialect",
                start,
            )
        return self._token(EscapeKind.HEX_BYTE, bytes([value]), start)

    def _lex_unicode_escape(self, start: int) -> EscapeToken:
        """Read '{', one to six hex digits and '}' after '\\u'."""
        if self._peek() != b"{":
            raise self._error(
                ErrorKind.MALFORMED_UNICODE_ESCAPE,
                "unicode escape must start with '{'",
                start,
            )
        self._pos += 1

        value = 0
        count = 0
        while True:
            ch = self._peek()
            if not ch:
                raise self._error(
                    ErrorKind.MALFORMED_UNICODE_ESCAPE,
                    "unterminated unicode escape: missing '}'",
                    start,
                )
            if ch == b"}":
                break
            digit = hex_digit_value(ch)
            if digit is None:
                raise self._invalid_digit(start)
            count += 1
            if count > _MAX_UNICODE_DIGITS:
                raise self._error(
                    ErrorKind.MALFORMED_UNICODE_ESCAPE,
                    f"unicode escape must have at most {_MAX_UNICODE_DIGITS} hex digits",
                    start,
                    self._pos + 1,
                )
            value = value * 16 + digit
            self._pos += 1
        self._pos += 1  # closing brace

        if count == 0:
            raise self._error(
                ErrorKind.MALFORMED_UNICODE_ESCAPE,
                "empty unicode escape: expected 1 to 6 hex digits",
                start,
            )
        if value > _MAX_SCALAR or 0xD800 <= value <= 0xDFFF:
            raise self._error(
                ErrorKind.INVALID_SCALAR_VALUE,
                f"U+{value:04X} is not a valid unicode scalar value",
                start,
            )
        return self._token(EscapeKind.UNICODE_SCALAR, chr(value).encode("utf-8"), start)


def resolve(
    source: str | bytes | bytearray,
    dialect: Dialect = Dialect.UNICODE,
    *,
    strict: bool = False,
) -> str:
    """Resolve all escapes in source and return the resulting text."""
    resolver = Resolver(source, dialect, strict=strict)
    return resolver.decode(resolver.resolve())


def resolve_bytes(
    source: str | bytes | bytearray,
    dialect: Dialect = Dialect.BYTE,
    *,
    strict: bool = False,
) -> bytes:
    """Resolve all escapes in source without validating the output as UTF-8."""
    return Resolver(source, dialect, strict=strict).resolve()


def scan(
    source: str | bytes | bytearray,
    dialect: Dialect = Dialect.UNICODE,
    *,
    strict: bool = False,
) -> list[EscapeToken]:
    """Return the escape tokens recognised in source, in source order."""
    resolver = Resolver(source, dialect, strict=strict)
    resolver.resolve()
    return resolver.tokens
