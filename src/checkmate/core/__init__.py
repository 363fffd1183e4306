# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models, severities and error types shared across checkmate."""

from __future__ import annotations

from .errors import CheckmateError, ConfigError, DiscoveryError, ExecutionError
from .models import (
    Diagnostic,
    DiagnosticsReport,
    ExecutionFailure,
    InstalledPluginSet,
    OutcomeKind,
    ParseFailure,
    PluginConfig,
    PluginOverride,
    Position,
    Range,
    ReportOutcome,
    ToolFailure,
)
from .severity import Severity

__all__ = [
    "CheckmateError",
    "ConfigError",
    "Diagnostic",
    "DiagnosticsReport",
    "DiscoveryError",
    "ExecutionError",
    "ExecutionFailure",
    "InstalledPluginSet",
    "OutcomeKind",
    "ParseFailure",
    "PluginConfig",
    "PluginOverride",
    "Position",
    "Range",
    "ReportOutcome",
    "Severity",
    "ToolFailure",
]
