"""Error types with formatted source context."""

from __future__ import annotations

from enum import Enum

from unescaper.tokens import Span


class ErrorKind(Enum):
    INVALID_UTF8 = "invalid-utf8"
    INCOMPLETE_HEX_ESCAPE = "incomplete-hex-escape"
    INVALID_HEX_DIGIT = "invalid-hex-digit"
    HEX_VALUE_OUT_OF_RANGE = "hex-value-out-of-range"
    MALFORMED_UNICODE_ESCAPE = "malformed-unicode-escape"
    INVALID_SCALAR_VALUE = "invalid-scalar-value"
    UNSUPPORTED_DIALECT_FEATURE = "unsupported-dialect-feature"


class EscapeError(ValueError):
    """Raised on the first malformed escape, with span and source context.

    The whole resolution is abandoned; no partial output is produced.
    """

    def __init__(self, kind: ErrorKind, message: str, span: Span, source: str) -> None:
        self.kind = kind
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
