# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Client configuration parsing and plugin resolution."""

from __future__ import annotations

from .models import CONFIG_SECTION, ClientOverride, ServerOptions, parse_client_settings, split_tokens
from .resolver import ResolutionResult, SettingsResolver, merge_plugin_config

__all__ = [
    "CONFIG_SECTION",
    "ClientOverride",
    "ResolutionResult",
    "ServerOptions",
    "SettingsResolver",
    "merge_plugin_config",
    "parse_client_settings",
    "split_tokens",
]
