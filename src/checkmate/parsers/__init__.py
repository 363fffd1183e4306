# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report normalisers translating tool output into canonical diagnostics."""

from __future__ import annotations

from .base import JsonParser, JsonTransform, ReportShapeError, load_json
from .javascript import parse_eslint, parse_stylelint
from .php import parse_phpcs, parse_phpstan

__all__ = [
    "JsonParser",
    "JsonTransform",
    "ReportShapeError",
    "load_json",
    "parse_eslint",
    "parse_phpcs",
    "parse_phpstan",
    "parse_stylelint",
]
