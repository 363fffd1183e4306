# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the installed plugin set for a project session."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from checkmate.core.errors import CheckmateError, ConfigError, DiscoveryError
from checkmate.core.models import InstalledPluginSet, PluginConfig, PluginOverride
from checkmate.core.runtime.process import probe_executable
from checkmate.plugins.base import ProbeCallable
from checkmate.plugins.registry import PluginRegistry

LOGGER = logging.getLogger(__name__)


def merge_plugin_config(defaults: PluginConfig, override: PluginOverride) -> PluginConfig:
    """Merge discovered defaults with a client override.

    The policy is deliberately asymmetric:

    * ``cmd``: a non-empty override replaces the default.
    * ``args``: override tokens are appended after the defaults.
    * ``filetypes``: a non-empty override replaces the defaults entirely.

    Args:
        defaults: Configuration returned by discovery.
        override: Client override, possibly empty.

    Returns:
        PluginConfig: Merged configuration.
    """

    return PluginConfig(
        cmd=override.cmd or defaults.cmd,
        args=(*defaults.args, *override.args),
        filetypes=override.filetypes or defaults.filetypes,
    )


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Installed plugin set together with the errors emitted while building it."""

    installed: InstalledPluginSet
    errors: tuple[CheckmateError, ...] = field(default_factory=tuple)


@dataclass(slots=True)
class SettingsResolver:
    """Build the installed plugin set from client overrides and tool discovery."""

    registry: PluginRegistry
    probe: ProbeCallable = probe_executable

    def resolve(self, root_dir: Path, requested: Mapping[str, PluginOverride]) -> ResolutionResult:
        """Resolve every requested plugin independently.

        Unknown ids yield a :class:`ConfigError` and undiscoverable tools a
        :class:`DiscoveryError`; both are logged and skipped without affecting
        the remaining ids.

        Args:
            root_dir: Project root directory.
            requested: Plugin ids requested by the client with their overrides.

        Returns:
            ResolutionResult: Installed plugins and the errors that were emitted.
        """

        installed: dict[str, PluginConfig] = {}
        errors: list[CheckmateError] = []
        for plugin_id, override in requested.items():
            try:
                installed[plugin_id] = self.resolve_one(root_dir, plugin_id, override)
            except CheckmateError as exc:
                LOGGER.warning("%s", exc)
                errors.append(exc)
        for plugin_id, config in installed.items():
            LOGGER.info("Plugin %s is installed, executable path is %s", plugin_id, config.cmd)
        return ResolutionResult(installed=InstalledPluginSet(installed), errors=tuple(errors))

    def resolve_one(self, root_dir: Path, plugin_id: str, override: PluginOverride) -> PluginConfig:
        """Return the merged configuration for ``plugin_id``.

        Raises:
            ConfigError: When the id is unknown or the merged configuration is unusable.
            DiscoveryError: When the tool cannot be found or started.
        """

        plugin = self.registry.try_get(plugin_id)
        if plugin is None:
            raise ConfigError(plugin_id, "plugin does not exist")

        found = plugin.locate(root_dir, override.cmd or None, probe=self.probe)
        if found is None:
            raise DiscoveryError(plugin_id, "plugin is not installed or can't be executed")

        if override.cmd:
            accepted = found.override_accepted
            if accepted is None:
                accepted = plugin.try_command(override.cmd, probe=self.probe)
            if not accepted:
                LOGGER.warning(
                    "%s: configured command %s cannot be started, using %s",
                    plugin_id,
                    override.cmd,
                    found.config.cmd,
                )
                override = override.model_copy(update={"cmd": ""})

        merged = merge_plugin_config(found.config, override)
        if not merged.cmd:
            raise ConfigError(plugin_id, "resolved command is empty")
        if not merged.filetypes:
            raise ConfigError(plugin_id, "resolved filetypes are empty")
        return merged


__all__ = ["ResolutionResult", "SettingsResolver", "merge_plugin_config"]
