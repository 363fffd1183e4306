# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plugin adapter contract shared by every supported analysis tool.

An adapter bundles three capabilities: discovering the tool's executable for
a project, running it against one file, and normalising its report. Concrete
adapters only declare their conventions (binary location, default arguments,
filetypes and report parser); the behaviour lives here.
"""

from __future__ import annotations

import logging
from abc import ABC
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import ClassVar, Protocol, runtime_checkable

from checkmate.core.errors import ExecutionError
from checkmate.core.models import (
    Diagnostic,
    DiagnosticsReport,
    ExecutionFailure,
    ParseFailure,
    PluginConfig,
    ReportOutcome,
    ToolFailure,
)
from checkmate.core.runtime.process import (
    CommandOptions,
    CommandTimeoutError,
    ProbeResult,
    ProbeStatus,
    probe_executable,
    run_command,
)
from checkmate.parsers.base import JsonParser, ReportShapeError

LOGGER = logging.getLogger(__name__)

ProbeCallable = Callable[[str], ProbeResult]


@dataclass(frozen=True, slots=True)
class Discovery:
    """Discovered defaults and what became of the configured command.

    ``override_accepted`` is ``None`` when no configured command was tried,
    either because none was given or because a project-local binary was
    found first.
    """

    config: PluginConfig
    override_accepted: bool | None = None


@runtime_checkable
class RunnerCallable(Protocol):
    """Callable protocol for invoking external tool commands."""

    def __call__(
        self,
        cmd: Sequence[str],
        *,
        options: CommandOptions | None = None,
    ) -> CompletedProcess[str]:
        """Execute ``cmd`` returning a completed subprocess with text output.

        Args:
            cmd: Command to execute including executable and arguments.
            options: Optional command execution configuration.

        Returns:
            CompletedProcess[str]: Completed subprocess with captured output.
        """

        raise NotImplementedError


class Plugin(ABC):
    """Base class for tool adapters registered in the plugin registry."""

    plugin_id: ClassVar[str]
    executable: ClassVar[str]
    project_bin_dir: ClassVar[tuple[str, ...]]
    default_args: ClassVar[tuple[str, ...]]
    default_filetypes: ClassVar[tuple[str, ...]]
    parser: ClassVar[JsonParser]
    global_fallback: ClassVar[bool] = True

    @property
    def id(self) -> str:
        """Return the stable registry key of the adapter."""

        return self.plugin_id

    def project_executable(self, root_dir: Path) -> Path:
        """Return the conventional project-local path of the tool binary."""

        return root_dir.joinpath(*self.project_bin_dir, self.executable)

    def defaults(self, cmd: str) -> PluginConfig:
        """Return the canonical configuration for the tool invoked as ``cmd``."""

        return PluginConfig(cmd=cmd, args=self.default_args, filetypes=self.default_filetypes)

    def discover(
        self,
        root_dir: Path,
        override_cmd: str | None = None,
        *,
        probe: ProbeCallable = probe_executable,
    ) -> PluginConfig | None:
        """Decide whether and how the tool can be invoked for ``root_dir``.

        Checks run in order and stop at the first success: the project-local
        binary, then the client supplied command, then the bare executable
        name on ``PATH`` for adapters that allow a global install.

        Args:
            root_dir: Project root directory.
            override_cmd: Command supplied by the client, if any.
            probe: Callable used to try starting an executable.

        Returns:
            PluginConfig | None: Default configuration when the tool is usable,
            ``None`` otherwise.
        """

        found = self.locate(root_dir, override_cmd, probe=probe)
        return found.config if found is not None else None

    def locate(
        self,
        root_dir: Path,
        override_cmd: str | None = None,
        *,
        probe: ProbeCallable = probe_executable,
    ) -> Discovery | None:
        """Run the discovery checks of :meth:`discover` and report on ``override_cmd``.

        Returns:
            Discovery | None: Defaults plus whether the configured command
            started, or ``None`` when the tool is unusable.
        """

        local = self.project_executable(root_dir)
        if local.exists():
            LOGGER.info("Plugin %s found at %s", self.id, local)
            return Discovery(self.defaults(str(local)))
        LOGGER.info("Project %s not found at %s", self.id, local)

        override_accepted: bool | None = None
        if override_cmd:
            override_accepted = self.try_command(override_cmd, probe=probe)
            if override_accepted:
                return Discovery(self.defaults(override_cmd), override_accepted=True)

        if not self.global_fallback:
            return None
        LOGGER.info("Trying global %s ...", self.executable)
        if self._probe(self.executable, probe, scope="Global"):
            return Discovery(self.defaults(self.executable), override_accepted=override_accepted)
        return None

    def try_command(self, command: str, *, probe: ProbeCallable = probe_executable) -> bool:
        """Return ``True`` when the client configured ``command`` can be started."""

        return self._probe(command, probe, scope="Configured")

    def _probe(self, command: str, probe: ProbeCallable, *, scope: str) -> bool:
        """Try to start ``command`` and log why it failed when it did."""

        result = probe(command)
        if result.status is ProbeStatus.STARTED:
            LOGGER.info("%s %s found: %s", scope, self.id, command)
            return True
        if result.status is ProbeStatus.NOT_FOUND:
            LOGGER.info("%s %s not found: %s", scope, self.id, command)
        else:
            LOGGER.error("%s %s cannot be executed: %s (%s)", scope, self.id, command, result.detail)
        return False

    def normalize(self, stdout: str) -> Sequence[Diagnostic]:
        """Translate the tool's stdout into canonical diagnostics.

        Raises:
            ReportShapeError: When the report cannot be decoded.
        """

        return self.parser.parse(stdout)

    def execute(
        self,
        config: PluginConfig,
        file_path: str,
        *,
        runner: RunnerCallable = run_command,
        options: CommandOptions | None = None,
    ) -> CompletedProcess[str]:
        """Spawn the tool against ``file_path`` and wait for it.

        Raises:
            ExecutionError: When the process cannot be started or times out.
        """

        command = config.command_for(file_path)
        LOGGER.debug("Running %s: %s", self.id, " ".join(command))
        try:
            return runner(command, options=options)
        except CommandTimeoutError as exc:
            raise ExecutionError(self.id, str(exc)) from exc
        except OSError as exc:
            raise ExecutionError(self.id, f"failed to start {config.cmd}: {exc}") from exc

    def run(
        self,
        config: PluginConfig,
        file_path: str,
        *,
        runner: RunnerCallable = run_command,
        options: CommandOptions | None = None,
    ) -> ReportOutcome:
        """Run the tool against ``file_path`` and classify the result.

        Args:
            config: Resolved configuration for this plugin.
            file_path: Absolute path of the saved file, appended last.
            runner: Callable executing the command.
            options: Execution options such as working directory and timeout.

        Returns:
            ReportOutcome: Parsed diagnostics or the failure category.
        """

        try:
            completed = self.execute(config, file_path, runner=runner, options=options)
        except ExecutionError as exc:
            LOGGER.error("%s", exc)
            return ExecutionFailure(plugin=self.id, detail=exc.message)

        stderr = completed.stderr or ""
        if stderr.strip():
            LOGGER.error("%s returned error: %s", self.id, stderr.strip())
            return ToolFailure(plugin=self.id, stderr=stderr)

        try:
            diagnostics = self.normalize(completed.stdout or "")
        except ReportShapeError as exc:
            LOGGER.warning("%s report could not be parsed: %s", self.id, exc)
            return ParseFailure(plugin=self.id, detail=str(exc))

        LOGGER.debug("%s ended with %d diagnostic(s)", self.id, len(diagnostics))
        return DiagnosticsReport(plugin=self.id, diagnostics=tuple(diagnostics))


__all__ = ["Discovery", "Plugin", "ProbeCallable", "RunnerCallable"]
