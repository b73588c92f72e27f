"""gwn Language Server: pygls-based LSP publishing parse diagnostics.

Parses a document on open and on every change, and publishes one
diagnostic per lexical or syntax error over stdio.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from gwn import __version__
from gwn.errors import GwnError
from gwn.parser import Parser

# ── Conversion helpers ────────────────────────────────────────────


def error_to_range(error: GwnError) -> lsp.Range:
    """Convert a 1-indexed gwn position to a 0-indexed LSP Range.

    gwn columns point just past the offending text, so the range covers the
    single character before the column.
    """
    line, col = error.position()
    lsp_line = max(0, line - 1)
    start = max(0, col - 1)
    return lsp.Range(
        start=lsp.Position(line=lsp_line, character=start),
        end=lsp.Position(line=lsp_line, character=start + 1),
    )


def _to_lsp_diag(error: GwnError) -> lsp.Diagnostic:
    return lsp.Diagnostic(
        range=error_to_range(error),
        severity=lsp.DiagnosticSeverity.Error,
        source="gwn",
        code=error.code,
        message=f"{error.message()}{error.place()}",
    )


# ── Per-document state ────────────────────────────────────────────


@dataclass
class DocumentState:
    """Cached parse results for a single open document."""

    source: str = ""
    diagnostics: list[lsp.Diagnostic] = field(default_factory=list)


# ── Server ────────────────────────────────────────────────────────

server = LanguageServer(
    "gwn-lsp", __version__,
    text_document_sync_kind=lsp.TextDocumentSyncKind.Full,
)
_state: dict[str, DocumentState] = {}


def _analyze(uri: str, source: str) -> DocumentState:
    """Parse the document, cache the results, return the state."""
    # stdout carries the protocol; collect errors instead of echoing them
    parser = Parser(source, reporter=lambda err: None)
    parser.parse()
    ds = DocumentState(
        source=source,
        diagnostics=[_to_lsp_diag(e) for e in parser.diagnostics],
    )
    _state[uri] = ds
    return ds


def _publish(uri: str, source: str) -> None:
    ds = _analyze(uri, source)
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri,
        diagnostics=ds.diagnostics,
    ))


# ── LSP Feature Handlers ─────────────────────────────────────────


@server.feature(lsp.TEXT_DOCUMENT_DID_OPEN)
def did_open(params: lsp.DidOpenTextDocumentParams) -> None:
    _publish(params.text_document.uri, params.text_document.text)


@server.feature(lsp.TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: lsp.DidChangeTextDocumentParams) -> None:
    # Full sync: the last change holds the whole document
    source = params.content_changes[-1].text if params.content_changes else ""
    _publish(params.text_document.uri, source)


@server.feature(lsp.TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: lsp.DidCloseTextDocumentParams) -> None:
    _state.pop(params.text_document.uri, None)


def main() -> None:
    """Start the gwn language server on stdio."""
    server.start_io()
