# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool adapters and the registry that exposes them."""

from __future__ import annotations

from .base import Discovery, Plugin, ProbeCallable, RunnerCallable
from .eslint import EslintPlugin
from .phpcs import PhpcsPlugin
from .phpstan import PhpstanPlugin
from .registry import DEFAULT_REGISTRY, PluginRegistry, build_default_registry
from .stylelint import StylelintPlugin

__all__ = [
    "DEFAULT_REGISTRY",
    "Discovery",
    "EslintPlugin",
    "PhpcsPlugin",
    "PhpstanPlugin",
    "Plugin",
    "PluginRegistry",
    "ProbeCallable",
    "RunnerCallable",
    "StylelintPlugin",
    "build_default_registry",
]
