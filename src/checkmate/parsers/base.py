# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared parser infrastructure and helper utilities."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import cast

from checkmate.core.models import Diagnostic, JsonValue, Range
from checkmate.core.serialization import coerce_optional_int, is_json_sequence
from checkmate.core.severity import Severity

JsonTransform = Callable[[JsonValue], Sequence[Diagnostic]]


class ReportShapeError(ValueError):
    """Raised when a tool report is not valid JSON or has the wrong top-level shape."""


def load_json(stdout: str) -> JsonValue:
    """Decode ``stdout`` as a single JSON document.

    Args:
        stdout: Raw standard output captured from the tool.

    Returns:
        JsonValue: Decoded payload.

    Raises:
        ReportShapeError: When ``stdout`` is empty or not valid JSON.
    """

    text = stdout.strip()
    if not text:
        raise ReportShapeError("empty report")
    try:
        return cast(JsonValue, json.loads(text))
    except json.JSONDecodeError as exc:
        raise ReportShapeError(f"invalid JSON: {exc.msg} at line {exc.lineno} column {exc.colno}") from exc


def require_sequence(payload: JsonValue, tool: str) -> list[JsonValue]:
    """Return ``payload`` as a list or raise when the report is not an array."""

    if not is_json_sequence(payload):
        raise ReportShapeError(f"{tool} report must be a JSON array")
    return list(cast(list[JsonValue], payload))


def require_mapping(payload: JsonValue, tool: str) -> Mapping[str, JsonValue]:
    """Return ``payload`` as a mapping or raise when the report is not an object."""

    if not isinstance(payload, Mapping):
        raise ReportShapeError(f"{tool} report must be a JSON object")
    return payload


def iter_dicts(value: JsonValue) -> Iterator[Mapping[str, JsonValue]]:
    """Yield mapping items from ``value`` when it is a sequence of dict-like objects."""

    if is_json_sequence(value):
        for item in cast(list[JsonValue], value):
            if isinstance(item, Mapping):
                yield item


def zero_based_line(value: JsonValue) -> int | None:
    """Convert a 1-indexed line number into the zero-indexed LSP line.

    Returns ``None`` when the value is missing or not a positive integer so the
    caller can skip the entry.
    """

    line = coerce_optional_int(value)
    if line is None or line < 1:
        return None
    return line - 1


def column_as_reported(value: JsonValue) -> int:
    """Return a column offset used verbatim, clamped to zero when absent or negative."""

    column = coerce_optional_int(value)
    if column is None or column < 0:
        return 0
    return column


def point_diagnostic(
    *,
    line: int,
    column: int,
    severity: Severity,
    message: str,
    source: str,
) -> Diagnostic:
    """Build a :class:`Diagnostic` whose range collapses to a single position."""

    return Diagnostic(range=Range.point(line, column), severity=severity, message=message, source=source)


@dataclass(frozen=True, slots=True)
class JsonParser:
    """Parse stdout as JSON and delegate to a transform function."""

    transform: JsonTransform

    def parse(self, stdout: str) -> Sequence[Diagnostic]:
        """Return diagnostics derived from ``stdout``.

        Args:
            stdout: Complete standard output of one tool invocation.

        Returns:
            Sequence[Diagnostic]: Canonical diagnostics.

        Raises:
            ReportShapeError: When the output is not a report of the expected shape.
        """

        return self.transform(load_json(stdout))


__all__ = [
    "JsonParser",
    "JsonTransform",
    "ReportShapeError",
    "column_as_reported",
    "iter_dicts",
    "load_json",
    "point_diagnostic",
    "require_mapping",
    "require_sequence",
    "zero_based_line",
]
