# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels normalising different tool vocabularies."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


DEFAULT_SEVERITY: Final[Severity] = Severity.INFO


def map_severity(
    label: object,
    mapping: Mapping[object, Severity],
    default: Severity = DEFAULT_SEVERITY,
) -> Severity:
    """Return a :class:`Severity` derived from ``label`` using ``mapping``.

    Lookups are exact: tools that report ``"ERROR"`` and tools that report
    ``"error"`` carry their own tables. Booleans never match integer keys.

    Args:
        label: Native severity value emitted by a tool.
        mapping: Tool specific vocabulary table.
        default: Severity returned when ``label`` is unmapped.

    Returns:
        Severity: Mapped severity, or ``default`` for unknown labels.
    """

    if isinstance(label, bool) or label is None:
        return default
    try:
        return mapping.get(label, default)
    except TypeError:
        return default


__all__ = ["DEFAULT_SEVERITY", "Severity", "map_severity"]
