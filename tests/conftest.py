"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from unescaper.errors import ErrorKind, EscapeError
from unescaper.resolver import resolve, scan
from unescaper.tokens import Dialect, EscapeKind, EscapeToken


@pytest.fixture(params=list(Dialect), ids=lambda d: d.name.lower())
def dialect(request) -> Dialect:
    """Run a test once per dialect."""
    return request.param


@pytest.fixture
def scan_escapes():
    """Return a helper that scans source and returns the escape tokens."""

    def _scan(
        source: str, dialect: Dialect = Dialect.UNICODE, strict: bool = False
    ) -> list[EscapeToken]:
        return scan(source, dialect, strict=strict)

    return _scan


def assert_kinds(tokens: list[EscapeToken], expected: list[EscapeKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_fails(source: str | bytes, dialect: Dialect, kind: ErrorKind) -> EscapeError:
    """Assert that resolving source fails with the given error kind."""
    with pytest.raises(EscapeError) as exc_info:
        resolve(source, dialect)
    err = exc_info.value
    assert err.kind == kind, f"Expected {kind}, got {err.kind}: {err.message}"
    return err
