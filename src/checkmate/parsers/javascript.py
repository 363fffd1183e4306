# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers for JavaScript and stylesheet tooling."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from checkmate.core.models import Diagnostic, JsonValue, Position, Range
from checkmate.core.serialization import coerce_optional_str
from checkmate.core.severity import Severity, map_severity

from .base import column_as_reported, iter_dicts, point_diagnostic, require_sequence, zero_based_line

ESLINT_SEVERITIES: Final[dict[object, Severity]] = {
    1: Severity.WARNING,
    2: Severity.ERROR,
}
STYLELINT_SEVERITIES: Final[dict[object, Severity]] = {
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
}


def parse_eslint(payload: JsonValue) -> Sequence[Diagnostic]:
    """Parse ESLint JSON diagnostics into canonical diagnostics.

    ESLint lines are 1-indexed and are shifted down by one; columns are used
    exactly as reported. Every finding becomes a point range.

    Args:
        payload: JSON payload produced by ESLint when invoked with ``-f=json``.

    Returns:
        Sequence[Diagnostic]: Diagnostics derived from the ESLint result set.
    """
    results: list[Diagnostic] = []
    for entry in iter_dicts(require_sequence(payload, "eslint")):
        for message in iter_dicts(entry.get("messages")):
            line = zero_based_line(message.get("line"))
            if line is None:
                continue
            results.append(
                point_diagnostic(
                    line=line,
                    column=column_as_reported(message.get("column")),
                    severity=map_severity(message.get("severity"), ESLINT_SEVERITIES),
                    message=coerce_optional_str(message.get("message")) or "",
                    source="eslint",
                ),
            )
    return results


def parse_stylelint(payload: JsonValue) -> Sequence[Diagnostic]:
    """Parse stylelint JSON warnings into canonical diagnostics.

    stylelint is the only supported tool that reports a genuine span: both
    ``line`` and ``endLine`` are shifted down by one, ``column`` and
    ``endColumn`` are used as reported. Missing end fields collapse onto the
    start position.

    Args:
        payload: JSON payload produced by stylelint when invoked with ``-f=json``.

    Returns:
        Sequence[Diagnostic]: Diagnostics describing stylelint findings.
    """
    results: list[Diagnostic] = []
    for entry in iter_dicts(require_sequence(payload, "stylelint")):
        for warning in iter_dicts(entry.get("warnings")):
            start_line = zero_based_line(warning.get("line"))
            if start_line is None:
                continue
            start_column = column_as_reported(warning.get("column"))
            end_line = zero_based_line(warning.get("endLine"))
            end_column = (
                column_as_reported(warning.get("endColumn")) if warning.get("endColumn") is not None else start_column
            )
            results.append(
                Diagnostic(
                    range=Range(
                        start=Position(line=start_line, character=start_column),
                        end=Position(
                            line=end_line if end_line is not None else start_line,
                            character=end_column,
                        ),
                    ),
                    severity=map_severity(warning.get("severity"), STYLELINT_SEVERITIES),
                    message=coerce_optional_str(warning.get("text")) or "",
                    source="stylelint",
                ),
            )
    return results


__all__ = [
    "ESLINT_SEVERITIES",
    "STYLELINT_SEVERITIES",
    "parse_eslint",
    "parse_stylelint",
]
