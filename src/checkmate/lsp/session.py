# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocol-independent state of one checkmate session.

The session owns the installed plugin set for a workspace root and runs a
dispatch pass for each saved file. It knows nothing about LSP transport so
the CLI can drive it directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock

from checkmate.config.models import ServerOptions, parse_client_settings
from checkmate.config.resolver import ResolutionResult, SettingsResolver
from checkmate.core.models import InstalledPluginSet
from checkmate.core.runtime.process import probe_executable, run_command
from checkmate.orchestration.dispatcher import DispatchResult, ExecutionDispatcher
from checkmate.orchestration.generations import DocumentGenerations
from checkmate.plugins.base import ProbeCallable, RunnerCallable
from checkmate.plugins.registry import DEFAULT_REGISTRY, PluginRegistry

LOGGER = logging.getLogger(__name__)


class CheckmateSession:
    """Installed plugins, dispatcher and generation counters for one workspace."""

    def __init__(
        self,
        registry: PluginRegistry = DEFAULT_REGISTRY,
        options: ServerOptions | None = None,
        *,
        probe: ProbeCallable = probe_executable,
        runner: RunnerCallable = run_command,
    ) -> None:
        """Create an uninitialised session.

        Args:
            registry: Plugin registry consulted at initialisation.
            options: Runtime options; defaults come from the environment.
            probe: Callable used by discovery to try starting executables.
            runner: Callable used to execute tool commands.
        """

        self.registry = registry
        self.options = options or ServerOptions.from_env()
        self.resolver = SettingsResolver(registry=registry, probe=probe)
        self.dispatcher = ExecutionDispatcher(
            registry=registry,
            runner=runner,
            jobs=self.options.jobs,
            timeout_s=self.options.timeout_s,
        )
        self.generations = DocumentGenerations()
        self._lock = Lock()
        self._root: Path | None = None
        self._resolution: ResolutionResult | None = None

    @property
    def initialized(self) -> bool:
        """Return ``True`` once the installed plugin set has been resolved."""

        return self._resolution is not None

    @property
    def root(self) -> Path | None:
        """Return the workspace root, or ``None`` before initialisation."""

        return self._root

    @property
    def installed(self) -> InstalledPluginSet:
        """Return the installed plugin set; empty until :meth:`initialize` ran."""

        resolution = self._resolution
        return resolution.installed if resolution is not None else InstalledPluginSet()

    def initialize(self, root_dir: Path, raw_settings: object) -> ResolutionResult:
        """Resolve the installed plugin set once for ``root_dir``.

        Later calls keep the first result; restarting the session is the only
        way to pick up configuration changes.

        Args:
            root_dir: Workspace root directory.
            raw_settings: ``checkmate.plugins`` payload received from the client.

        Returns:
            ResolutionResult: The installed set and the errors met while resolving it.
        """

        with self._lock:
            if self._resolution is not None:
                LOGGER.warning("Session already initialised for %s; ignoring new settings", self._root)
                return self._resolution
            root = root_dir.resolve()
            requested = parse_client_settings(raw_settings)
            LOGGER.info("Resolving %d plugin(s) for %s", len(requested), root)
            self._root = root
            self._resolution = self.resolver.resolve(root, requested)
            return self._resolution

    def lint(self, file_path: Path) -> DispatchResult:
        """Run every matching installed plugin against ``file_path``."""

        return self.dispatcher.dispatch(self.installed, file_path, root=self._root)


__all__ = ["CheckmateSession"]
