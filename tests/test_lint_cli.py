# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the ``checkmate`` command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fakes import ESLINT_REPORT, PHPCS_REPORT, FakeRunner, make_probe
from typer.testing import CliRunner

from checkmate.cli.app import app
from checkmate.config import ServerOptions
from checkmate.lsp.session import CheckmateSession
from checkmate.plugins import build_default_registry


@pytest.fixture
def patched_session(monkeypatch: pytest.MonkeyPatch) -> FakeRunner:
    """Route CLI sessions through a fake runner and a probe that finds nothing globally."""

    runner = FakeRunner(
        responses={
            "phpcs": (PHPCS_REPORT, ""),
            "eslint": (ESLINT_REPORT.replace('"severity":2', '"severity":1'), ""),
        },
    )

    def factory(options: ServerOptions | None = None) -> CheckmateSession:
        return CheckmateSession(build_default_registry(), options, probe=make_probe(), runner=runner)

    monkeypatch.setattr("checkmate.cli.lint.CheckmateSession", factory)
    monkeypatch.setattr("checkmate.cli.doctor.CheckmateSession", factory)
    return runner


def test_lint_reports_errors_with_exit_code(project: Path, patched_session: FakeRunner) -> None:
    target = project / "index.php"
    target.write_text("<?php\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["lint", str(target), "--root", str(project), "--config", '{"phpcs": {}}'],
    )

    assert result.exit_code == 1, result.output
    assert "X" in result.stdout
    assert patched_session.calls_for("phpcs") == [
        (str(project.resolve() / "vendor" / "bin" / "phpcs"), "--report=json", str(target)),
    ]


def test_lint_json_output_with_warnings_only(project: Path, patched_session: FakeRunner) -> None:
    target = project / "app.js"
    target.write_text("let a = 1\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["lint", str(target), "--root", str(project), "--config", '{"eslint": {}, "phpcs": {}}', "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["skipped"] == ["phpcs"]
    (diag,) = payload["diagnostics"]
    assert diag["source"] == "eslint"
    assert diag["severity"] == "warning"
    assert diag["range"]["start"] == {"line": 4, "character": 7}


def test_lint_reads_config_file(project: Path, patched_session: FakeRunner, tmp_path: Path) -> None:
    target = project / "index.php"
    target.write_text("<?php\n", encoding="utf-8")
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"phpcs": {"args": "--standard=PSR12"}}), encoding="utf-8")

    result = CliRunner().invoke(app, ["lint", str(target), "--root", str(project), "--config", str(settings)])

    assert result.exit_code == 1, result.output
    (call,) = patched_session.calls_for("phpcs")
    assert call[1:3] == ("--report=json", "--standard=PSR12")


def test_lint_rejects_invalid_config(project: Path, patched_session: FakeRunner) -> None:
    target = project / "index.php"
    target.write_text("<?php\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["lint", str(target), "--root", str(project), "--config", "{nope"])

    assert result.exit_code == 2
    assert patched_session.calls == []


def test_lint_root_defaults_to_current_directory(
    project: Path,
    patched_session: FakeRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    target = project / "index.php"
    target.write_text("<?php\n", encoding="utf-8")
    monkeypatch.chdir(project)

    result = CliRunner().invoke(app, ["lint", str(target), "--config", '{"phpcs": {}}'])

    assert result.exit_code == 1, result.output
    (call,) = patched_session.calls_for("phpcs")
    assert call[0] == str(project.resolve() / "vendor" / "bin" / "phpcs")
    assert patched_session.options[0].cwd == project.resolve()


def test_lint_rejects_missing_config_file(project: Path, patched_session: FakeRunner) -> None:
    target = project / "index.php"
    target.write_text("<?php\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["lint", str(target), "--root", str(project), "--config", str(project / "missing.json")],
    )

    assert result.exit_code == 2
    assert patched_session.calls == []


def test_serve_builds_options(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: list[ServerOptions] = []
    monkeypatch.setattr("checkmate.cli.serve.start", captured.append)
    log_file = tmp_path / "server.log"

    result = CliRunner().invoke(app, ["serve", "--jobs", "3", "--timeout", "5", "--log-file", str(log_file)])

    assert result.exit_code == 0, result.output
    (options,) = captured
    assert options.jobs == 3
    assert options.timeout_s == 5.0
    assert options.log_file == log_file
    assert not options.debug
