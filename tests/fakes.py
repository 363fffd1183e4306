# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Test doubles for process execution and discovery probes."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from subprocess import CompletedProcess
from threading import Lock

from checkmate.core.runtime.process import CommandOptions, ProbeResult, ProbeStatus

type Response = tuple[str, str] | BaseException


@dataclass
class FakeRunner:
    """Runner double keyed by executable basename, recording every invocation."""

    responses: dict[str, Response] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    options: list[CommandOptions | None] = field(default_factory=list)
    on_call: Callable[[tuple[str, ...]], None] | None = None
    _lock: Lock = field(default_factory=Lock, repr=False)

    def __call__(self, cmd: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
        command = tuple(cmd)
        with self._lock:
            self.calls.append(command)
            self.options.append(options)
        if self.on_call is not None:
            self.on_call(command)
        response = self.responses.get(Path(command[0]).name, ("", ""))
        if isinstance(response, BaseException):
            raise response
        stdout, stderr = response
        return CompletedProcess(list(command), 0, stdout, stderr)

    def calls_for(self, executable: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if Path(call[0]).name == executable]


def make_probe(statuses: Mapping[str, ProbeStatus] | None = None) -> Callable[[str], ProbeResult]:
    """Return a probe reporting ``statuses`` per command and ``NOT_FOUND`` otherwise."""

    table = dict(statuses or {})

    def probe(command: str) -> ProbeResult:
        status = table.get(command, ProbeStatus.NOT_FOUND)
        detail = "" if status is ProbeStatus.STARTED else f"{command}: {status.value}"
        return ProbeResult(status, detail)

    return probe


def install_local(root: Path, *parts: str) -> Path:
    """Create a fake project-local tool binary under ``root``."""

    path = root.joinpath(*parts)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n", encoding="utf-8")
    path.chmod(0o755)
    return path


PHPCS_REPORT = '{"files":{"a.php":{"messages":[{"message":"X","line":3,"column":2,"type":"ERROR"}]}}}'
PHPSTAN_REPORT = '{"totals":{},"files":{"a.php":{"errors":1,"messages":[{"message":"Bad call","line":10}]}}}'
ESLINT_REPORT = (
    '[{"filePath":"/p/a.js","messages":[{"ruleId":"semi","severity":2,"line":5,"column":7,'
    '"message":"Missing semicolon."}]}]'
)
STYLELINT_REPORT = (
    '[{"source":"/p/a.css","warnings":[{"line":2,"column":3,"endLine":4,"endColumn":9,'
    '"severity":"warning","text":"Unexpected unit"}]}]'
)


__all__ = [
    "ESLINT_REPORT",
    "FakeRunner",
    "PHPCS_REPORT",
    "PHPSTAN_REPORT",
    "STYLELINT_REPORT",
    "install_local",
    "make_probe",
]
