# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate canonical diagnostics into ``lsprotocol`` types."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Final
from urllib.parse import unquote, urlparse

from lsprotocol import types

from checkmate.core.models import Diagnostic, Range
from checkmate.core.severity import Severity

LSP_SEVERITIES: Final[dict[Severity, types.DiagnosticSeverity]] = {
    Severity.INFO: types.DiagnosticSeverity.Information,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
    Severity.ERROR: types.DiagnosticSeverity.Error,
}

LOG_MESSAGE_TYPES: Final[tuple[tuple[int, types.MessageType], ...]] = (
    (logging.ERROR, types.MessageType.Error),
    (logging.WARNING, types.MessageType.Warning),
    (logging.INFO, types.MessageType.Info),
)


def uri_to_path(uri: str) -> Path:
    """Return the filesystem path of a ``file://`` URI; other strings are used as paths."""

    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(uri)


def to_lsp_range(value: Range) -> types.Range:
    return types.Range(
        start=types.Position(line=value.start.line, character=value.start.character),
        end=types.Position(line=value.end.line, character=value.end.character),
    )


def to_lsp_diagnostic(diagnostic: Diagnostic) -> types.Diagnostic:
    """Convert a canonical diagnostic into its LSP representation."""

    return types.Diagnostic(
        range=to_lsp_range(diagnostic.range),
        severity=LSP_SEVERITIES[diagnostic.severity],
        message=diagnostic.message,
        source=diagnostic.source,
    )


def to_lsp_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[types.Diagnostic]:
    return [to_lsp_diagnostic(diagnostic) for diagnostic in diagnostics]


def message_type_for(levelno: int) -> types.MessageType:
    """Map a logging level onto the closest ``window/logMessage`` type."""

    for threshold, message_type in LOG_MESSAGE_TYPES:
        if levelno >= threshold:
            return message_type
    return types.MessageType.Log


__all__ = [
    "LSP_SEVERITIES",
    "message_type_for",
    "to_lsp_diagnostic",
    "to_lsp_diagnostics",
    "to_lsp_range",
    "uri_to_path",
]
