# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

_PROBE_REAP_TIMEOUT_S: Final[float] = 2.0


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    timeout: float | None = None
    discard_stdin: bool = True


class CommandTimeoutError(RuntimeError):
    """Raised when a subprocess exceeds its timeout and has been killed."""

    def __init__(self, command: Sequence[str], timeout: float, stdout: str, stderr: str) -> None:
        """Initialise the error with the command and whatever output was captured.

        Args:
            command: Normalised command sequence that was executed.
            timeout: Timeout in seconds that elapsed.
            stdout: Standard output captured before the process was killed.
            stderr: Standard error captured before the process was killed.
        """

        super().__init__(f"Command '{command[0]}' timed out after {timeout:.1f}s")
        self.command = tuple(command)
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr


class ProbeStatus(StrEnum):
    """Outcome of trying to start an executable."""

    STARTED = "started"
    NOT_FOUND = "not_found"
    NOT_EXECUTABLE = "not_executable"


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Result of :func:`probe_executable`."""

    status: ProbeStatus
    detail: str = ""

    @property
    def started(self) -> bool:
        """Return ``True`` when the executable could be launched."""

        return self.status is ProbeStatus.STARTED


def _ensure_text(value: str | bytes | None) -> str:
    """Return ``value`` decoded to text when supplied as ``bytes``.

    Args:
        value: Stream output captured from subprocess execution.

    Returns:
        str: Text output, empty when no data was captured.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(errors="replace")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` capturing stdout and stderr in full.

    The process is always waited for; on timeout it is killed and reaped
    before :class:`CommandTimeoutError` is raised.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring working directory, environment and timeout.

    Returns:
        CompletedProcess: Subprocess execution metadata with text output.

    Raises:
        FileNotFoundError: If the executable cannot be resolved.
        OSError: If the operating system refuses to spawn the process.
        CommandTimeoutError: When the process exceeds ``options.timeout``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()

    try:
        completed = subprocess.run(  # nosec B603 - controlled arguments, not shell expanded
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=True,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeoutError(
            normalized,
            resolved_options.timeout or 0.0,
            _ensure_text(exc.stdout),
            _ensure_text(exc.stderr),
        ) from exc

    return CompletedProcess(
        args=normalized,
        returncode=completed.returncode,
        stdout=_ensure_text(completed.stdout),
        stderr=_ensure_text(completed.stderr),
    )


def probe_executable(command: str, *, cwd: Path | None = None) -> ProbeResult:
    """Try to start ``command`` without letting it run to completion.

    The process is terminated as soon as it has been spawned and is always
    reaped before returning.

    Args:
        command: Executable name or path to start.
        cwd: Optional working directory for the probe.

    Returns:
        ProbeResult: ``STARTED`` when the executable launched, ``NOT_FOUND`` when
        it does not exist, ``NOT_EXECUTABLE`` when it exists but cannot run.
    """

    try:
        process = subprocess.Popen(  # nosec B603 - single executable, no shell
            [command],
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except FileNotFoundError as exc:
        return ProbeResult(ProbeStatus.NOT_FOUND, str(exc))
    except OSError as exc:
        return ProbeResult(ProbeStatus.NOT_EXECUTABLE, str(exc))

    process.terminate()
    try:
        process.wait(timeout=_PROBE_REAP_TIMEOUT_S)
    except subprocess.TimeoutExpired:
        process.kill()
        process.wait()
    return ProbeResult(ProbeStatus.STARTED)


__all__ = [
    "CommandOptions",
    "CommandTimeoutError",
    "ProbeResult",
    "ProbeStatus",
    "probe_executable",
    "run_command",
]
