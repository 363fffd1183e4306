# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Dispatch installed plugins against a saved document and collect their outcomes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from checkmate.core.models import Diagnostic, ExecutionFailure, InstalledPluginSet, PluginConfig, ReportOutcome
from checkmate.core.runtime.process import CommandOptions, run_command
from checkmate.plugins.base import RunnerCallable
from checkmate.plugins.registry import PluginRegistry

LOGGER = logging.getLogger(__name__)


def file_extension(file_path: Path) -> str:
    """Return the extension of ``file_path`` without its leading dot."""

    return file_path.suffix.lstrip(".")


@dataclass(frozen=True, slots=True)
class PlannedInvocation:
    """A plugin selected to run for the current save."""

    plugin_id: str
    config: PluginConfig


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcomes gathered for one save of one document."""

    file_path: Path
    outcomes: tuple[ReportOutcome, ...] = field(default_factory=tuple)
    skipped: tuple[str, ...] = field(default_factory=tuple)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Return every diagnostic from every successful outcome, in plugin order."""

        return tuple(diag for outcome in self.outcomes for diag in outcome.diagnostics)


@dataclass(slots=True)
class ExecutionDispatcher:
    """Run the installed plugins whose filetypes match a saved file."""

    registry: PluginRegistry
    runner: RunnerCallable = run_command
    jobs: int = 1
    timeout_s: float | None = None

    def plan(self, installed: InstalledPluginSet, file_path: Path) -> tuple[list[PlannedInvocation], list[str]]:
        """Split the installed plugins into those to run and those to skip.

        Args:
            installed: Installed plugin set of the session.
            file_path: Saved file.

        Returns:
            tuple[list[PlannedInvocation], list[str]]: Invocations to run and
            the ids of plugins skipped because of their filetypes.
        """

        extension = file_extension(file_path)
        planned: list[PlannedInvocation] = []
        skipped: list[str] = []
        for plugin_id in sorted(installed):
            config = installed[plugin_id]
            if not config.handles(extension):
                LOGGER.info(
                    "Skipping %s: allowed filetypes are %s, got %r",
                    plugin_id,
                    ", ".join(config.filetypes),
                    extension,
                )
                skipped.append(plugin_id)
                continue
            planned.append(PlannedInvocation(plugin_id=plugin_id, config=config))
        return planned, skipped

    def dispatch(self, installed: InstalledPluginSet, file_path: Path, *, root: Path | None = None) -> DispatchResult:
        """Run every matching plugin against ``file_path`` and join the results.

        A failure in one plugin never prevents the others from running.

        Args:
            installed: Installed plugin set of the session.
            file_path: Saved file; made absolute before being passed to tools.
            root: Working directory for the tool processes.

        Returns:
            DispatchResult: Outcomes ordered by plugin id.
        """

        absolute = file_path if file_path.is_absolute() else file_path.resolve()
        planned, skipped = self.plan(installed, absolute)
        options = CommandOptions(cwd=root, timeout=self.timeout_s)
        if self.jobs > 1 and len(planned) > 1:
            outcomes = self._execute_in_parallel(planned, absolute, options)
        else:
            outcomes = self._execute_serial(planned, absolute, options)
        return DispatchResult(file_path=absolute, outcomes=tuple(outcomes), skipped=tuple(skipped))

    def run_plugin(self, invocation: PlannedInvocation, file_path: Path, options: CommandOptions) -> ReportOutcome:
        """Run a single plugin, converting any adapter crash into an execution failure."""

        plugin = self.registry.try_get(invocation.plugin_id)
        if plugin is None:
            LOGGER.error("Plugin %s is installed but not registered", invocation.plugin_id)
            return ExecutionFailure(plugin=invocation.plugin_id, detail="plugin is not registered")
        LOGGER.info("Running plugin: %s", invocation.plugin_id)
        try:
            return plugin.run(invocation.config, str(file_path), runner=self.runner, options=options)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Plugin %s crashed", invocation.plugin_id)
            return ExecutionFailure(plugin=invocation.plugin_id, detail=f"{type(exc).__name__}: {exc}")

    def _execute_serial(
        self,
        planned: Iterable[PlannedInvocation],
        file_path: Path,
        options: CommandOptions,
    ) -> list[ReportOutcome]:
        return [self.run_plugin(invocation, file_path, options) for invocation in planned]

    def _execute_in_parallel(
        self,
        planned: list[PlannedInvocation],
        file_path: Path,
        options: CommandOptions,
    ) -> list[ReportOutcome]:
        results: dict[int, ReportOutcome] = {}
        with ThreadPoolExecutor(max_workers=min(self.jobs, len(planned))) as executor:
            future_map = {
                executor.submit(self.run_plugin, invocation, file_path, options): order
                for order, invocation in enumerate(planned)
            }
            for future in as_completed(future_map):
                results[future_map[future]] = future.result()
        return [results[order] for order in sorted(results)]


__all__ = ["DispatchResult", "ExecutionDispatcher", "PlannedInvocation", "file_extension"]
