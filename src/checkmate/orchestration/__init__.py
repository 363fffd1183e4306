# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dispatch of installed plugins for saved documents."""

from __future__ import annotations

from .dispatcher import DispatchResult, ExecutionDispatcher, PlannedInvocation, file_extension
from .generations import DocumentGenerations

__all__ = [
    "DispatchResult",
    "DocumentGenerations",
    "ExecutionDispatcher",
    "PlannedInvocation",
    "file_extension",
]
