# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Runtime helpers for spawning and probing external tools."""

from __future__ import annotations

from .process import (
    CommandOptions,
    CommandTimeoutError,
    ProbeResult,
    ProbeStatus,
    probe_executable,
    run_command,
)

__all__ = [
    "CommandOptions",
    "CommandTimeoutError",
    "ProbeResult",
    "ProbeStatus",
    "probe_executable",
    "run_command",
]
