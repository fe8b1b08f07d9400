"""Minimal LSP server for s-expression files: diagnostics only."""

from __future__ import annotations

import logging

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

from sexpr import __version__
from sexpr.errors import LexError, ParseError, TokenizerError
from sexpr.parser import Parser
from sexpr.tokenizer import TokenizerConfig
from sexpr.tokens import Position as SexprPosition

logger = logging.getLogger(__name__)

server = LanguageServer("sexpr-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def _diagnostic(start: Position, end: Position, message: str) -> Diagnostic:
    return Diagnostic(
        range=Range(start=start, end=end),
        message=message,
        severity=DiagnosticSeverity.Error,
        source="sexpr",
    )


def _utf16_col(lines: list[str], line: int, col: int) -> int:
    """Convert a code-point column to the UTF-16 offset LSP clients expect."""
    if not 0 <= line < len(lines):
        return col
    prefix = lines[line][:col]
    return len(prefix.encode("utf-16-le", "surrogatepass")) // 2


def _position(lines: list[str], pos: SexprPosition) -> Position:
    line = pos.line - 1
    return Position(line=line, character=_utf16_col(lines, line, pos.col))


def collect_diagnostics(source: str, config: TokenizerConfig | None = None) -> list[Diagnostic]:
    """Parse the whole document and report the first error, if any.

    Ranges use UTF-16 code units, the LSP default position encoding.
    """
    try:
        for _ in Parser(source, config):
            pass
    except TokenizerError as exc:
        return _lex_diagnostics(exc.error, source)
    except ParseError as exc:
        lines = source.split("\n")
        return [
            _diagnostic(
                _position(lines, exc.span.start), _position(lines, exc.span.end), exc.message
            )
        ]
    return []


def _lex_diagnostics(exc: LexError, source: str) -> list[Diagnostic]:
    lines = source.split("\n")
    start = _position(lines, exc.position)
    end = _position(lines, exc.position.advance(_char_at(lines, exc.position)))
    return [_diagnostic(start, end, exc.message)]


def _char_at(lines: list[str], pos: SexprPosition) -> str:
    line = pos.line - 1
    if 0 <= line < len(lines) and pos.col < len(lines[line]):
        return lines[line][pos.col]
    return " "


def _validate(ls: LanguageServer, uri: str) -> None:
    """Run the parser over the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics = collect_diagnostics(doc.source)
    logger.debug("%s: %d diagnostic(s)", uri, len(diagnostics))
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
