# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for PHP tooling (PHP_CodeSniffer and PHPStan)."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Final

from checkmate.core.models import Diagnostic, JsonValue
from checkmate.core.serialization import coerce_optional_str
from checkmate.core.severity import Severity, map_severity

from .base import column_as_reported, iter_dicts, point_diagnostic, require_mapping, zero_based_line

PHPCS_SEVERITIES: Final[dict[object, Severity]] = {
    "WARNING": Severity.WARNING,
    "ERROR": Severity.ERROR,
}
# PHPStan reports carry no column data; every finding is pinned to column 1.
PHPSTAN_COLUMN: Final[int] = 1


def _iter_file_messages(payload: JsonValue, tool: str) -> Iterator[Mapping[str, JsonValue]]:
    """Yield message objects from a ``{"files": {path: {"messages": [...]}}}`` report."""

    report = require_mapping(payload, tool)
    files = report.get("files")
    if not isinstance(files, Mapping):
        return
    for file_report in files.values():
        if isinstance(file_report, Mapping):
            yield from iter_dicts(file_report.get("messages"))


def parse_phpcs(payload: JsonValue) -> Sequence[Diagnostic]:
    """Parse PHP_CodeSniffer ``--report=json`` output.

    Lines are shifted down by one, columns are used as reported, and the
    ``type`` field selects the severity.

    Args:
        payload: JSON payload produced by phpcs.

    Returns:
        Sequence[Diagnostic]: Diagnostics describing phpcs findings.
    """
    results: list[Diagnostic] = []
    for message in _iter_file_messages(payload, "phpcs"):
        line = zero_based_line(message.get("line"))
        if line is None:
            continue
        results.append(
            point_diagnostic(
                line=line,
                column=column_as_reported(message.get("column")),
                severity=map_severity(message.get("type"), PHPCS_SEVERITIES),
                message=coerce_optional_str(message.get("message")) or "",
                source="phpcs",
            ),
        )
    return results


def parse_phpstan(payload: JsonValue) -> Sequence[Diagnostic]:
    """Parse PHPStan ``--error-format=json`` output.

    Args:
        payload: JSON payload produced by ``phpstan analyse``.

    Returns:
        Sequence[Diagnostic]: Error diagnostics at column 1 of each reported line.
    """
    results: list[Diagnostic] = []
    for message in _iter_file_messages(payload, "phpstan"):
        line = zero_based_line(message.get("line"))
        if line is None:
            continue
        results.append(
            point_diagnostic(
                line=line,
                column=PHPSTAN_COLUMN,
                severity=Severity.ERROR,
                message=coerce_optional_str(message.get("message")) or "",
                source="phpstan",
            ),
        )
    return results


__all__ = [
    "PHPCS_SEVERITIES",
    "PHPSTAN_COLUMN",
    "parse_phpcs",
    "parse_phpstan",
]
