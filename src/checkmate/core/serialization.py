# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for coercing untrusted JSON payloads and serialising diagnostics."""

from __future__ import annotations

from collections.abc import Sequence

from checkmate.core.models import Diagnostic, JsonValue

type SerializableMapping = dict[str, JsonValue]


def coerce_optional_int(value: JsonValue) -> int | None:
    """Return an optional integer parsed from ``value`` when feasible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def coerce_optional_str(value: JsonValue) -> str | None:
    """Return a string representation of ``value`` or ``None`` when unset."""
    if value is None:
        return None
    return str(value)


def is_json_sequence(value: JsonValue) -> bool:
    """Return ``True`` when ``value`` is a list-like JSON value rather than a string."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def serialize_diagnostic(diag: Diagnostic) -> SerializableMapping:
    """Convert a diagnostic into a JSON-friendly mapping."""
    return {
        "source": diag.source,
        "severity": diag.severity.value,
        "message": diag.message,
        "range": {
            "start": {"line": diag.range.start.line, "character": diag.range.start.character},
            "end": {"line": diag.range.end.line, "character": diag.range.end.character},
        },
    }


__all__ = [
    "SerializableMapping",
    "coerce_optional_int",
    "coerce_optional_str",
    "is_json_sequence",
    "serialize_diagnostic",
]
