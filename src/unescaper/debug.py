"""--debug escape token dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from unescaper.tokens import Dialect, EscapeToken


def dump_tokens(
    tokens: list[EscapeToken], dialect: Dialect, *, file: TextIO = sys.stderr
) -> None:
    """Print one line per recognised escape to *file*."""
    file.write(f"Escapes ({dialect.name.lower()}): {len(tokens)}\n")
    for token in tokens:
        _dump_token(token, file)


def _dump_token(token: EscapeToken, f: TextIO) -> None:
    start = token.span.start
    value = " ".join(f"{b:02X}" for b in token.value)
    f.write(
        f"  {start.line}:{start.column} [{start.offset}:{token.span.end.offset}] "
        f"{token.kind.name} {token.raw!r} -> {value}\n"
    )
