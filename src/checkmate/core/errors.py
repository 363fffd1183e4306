# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception taxonomy shared by the resolver, discovery and dispatch layers."""

from __future__ import annotations


class CheckmateError(Exception):
    """Base class for recoverable checkmate failures."""

    def __init__(self, plugin: str, message: str) -> None:
        """Initialise the error with the plugin it concerns.

        Args:
            plugin: Identifier of the plugin that triggered the failure.
            message: Human readable description of the failure.
        """

        super().__init__(f"{plugin}: {message}")
        self.plugin = plugin
        self.message = message


class ConfigError(CheckmateError):
    """Raised when the client requests an unknown plugin or an unusable configuration."""


class DiscoveryError(CheckmateError):
    """Raised when a plugin's executable cannot be found or started."""


class ExecutionError(CheckmateError):
    """Raised when a plugin subprocess cannot be spawned at run time."""


__all__ = ["CheckmateError", "ConfigError", "DiscoveryError", "ExecutionError"]
