"""Minimal LSP server for escape checking, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from unescaper.errors import EscapeError
from unescaper.resolver import resolve
from unescaper.tokens import Dialect


class EscapeLanguageServer(LanguageServer):
    """Language server that checks documents under one escape dialect."""

    def __init__(self, *args, dialect: Dialect = Dialect.UNICODE, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.dialect = dialect


server = EscapeLanguageServer(
    "unescaper-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full
)


def _lsp_position(lines: list[str], line: int, column: int) -> Position:
    """Convert a 1-based line and code-point column to a 0-based UTF-16 position."""
    text = lines[line - 1] if 0 < line <= len(lines) else ""
    prefix = text[: column - 1]
    return Position(line=line - 1, character=len(prefix.encode("utf-16-le")) // 2)


def _validate(ls: LanguageServer, uri: str, dialect: Dialect | None = None) -> None:
    """Resolve the document's escapes and publish diagnostics."""
    if dialect is None:
        dialect = getattr(ls, "dialect", Dialect.UNICODE)
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        resolve(doc.source, dialect)
    except EscapeError as exc:
        lines = exc.source.split("\n")
        start, end = exc.span.start, exc.span.end
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=_lsp_position(lines, start.line, start.column),
                    end=_lsp_position(lines, end.line, end.column),
                ),
                message=exc.message,
                severity=DiagnosticSeverity.Error,
                source="unescaper",
                code=exc.kind.value,
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: EscapeLanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: EscapeLanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
