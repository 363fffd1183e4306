# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for subprocess execution and executable probing."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from checkmate.core.runtime.process import (
    CommandOptions,
    CommandTimeoutError,
    ProbeStatus,
    probe_executable,
    run_command,
)


def test_run_command_captures_both_streams(tmp_path: Path) -> None:
    script = "import os, sys; print(os.getcwd()); print('warn', file=sys.stderr)"

    completed = run_command([sys.executable, "-c", script], options=CommandOptions(cwd=tmp_path))

    assert completed.returncode == 0
    assert Path(completed.stdout.strip()).resolve() == tmp_path.resolve()
    assert completed.stderr.strip() == "warn"


def test_run_command_does_not_inherit_stdin() -> None:
    completed = run_command([sys.executable, "-c", "import sys; print(repr(sys.stdin.read()))"])

    assert completed.stdout.strip() == "''"


def test_run_command_kills_on_timeout() -> None:
    with pytest.raises(CommandTimeoutError) as excinfo:
        run_command(
            [sys.executable, "-c", "import time; time.sleep(30)"],
            options=CommandOptions(timeout=0.5),
        )

    assert excinfo.value.timeout == 0.5
    assert "timed out" in str(excinfo.value)


def test_run_command_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["checkmate-definitely-missing-tool"])


def test_run_command_requires_arguments() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_probe_started() -> None:
    assert probe_executable(sys.executable).status is ProbeStatus.STARTED


def test_probe_not_found() -> None:
    result = probe_executable("checkmate-definitely-missing-tool")

    assert result.status is ProbeStatus.NOT_FOUND
    assert not result.started


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="requires POSIX permissions as non-root")
def test_probe_not_executable(tmp_path: Path) -> None:
    tool = tmp_path / "phpcs"
    tool.write_text("#!/bin/sh\n", encoding="utf-8")
    tool.chmod(0o644)

    result = probe_executable(str(tool))

    assert result.status is ProbeStatus.NOT_EXECUTABLE
    assert result.detail
