# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""One-shot lint command running the installed plugins against a single file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..config.models import ServerOptions
from ..core.logging import configure_logging, level_from_flags
from ..core.models import ExecutionFailure, ParseFailure, ToolFailure
from ..core.serialization import serialize_diagnostic
from ..core.severity import Severity
from ..lsp.session import CheckmateSession
from ..orchestration.dispatcher import DispatchResult
from .options import CONFIG_OPTION, JOBS_OPTION, ROOT_OPTION, TIMEOUT_OPTION, VERBOSE_OPTION, load_settings_option

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def run_lint(
    file_path: Path,
    root: Path,
    settings: object,
    *,
    session: CheckmateSession | None = None,
    console: Console | None = None,
    as_json: bool = False,
) -> int:
    """Resolve plugins for ``root``, lint ``file_path`` once and report the result.

    Args:
        file_path: File to lint.
        root: Project root directory.
        settings: ``checkmate.plugins`` payload.
        session: Optional preconfigured session.
        console: Optional ``rich`` console for output rendering.
        as_json: Emit JSON instead of a table.

    Returns:
        int: ``1`` when any error-severity diagnostic was produced, ``0`` otherwise.
    """

    console = console or Console()
    session = session or CheckmateSession()
    session.initialize(root, settings)
    result = session.lint(file_path)

    if as_json:
        payload = {
            "file": str(result.file_path),
            "diagnostics": [serialize_diagnostic(diag) for diag in result.diagnostics],
            "failures": _failure_rows(result),
            "skipped": list(result.skipped),
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        _render_table(console, result)

    has_errors = any(diag.severity is Severity.ERROR for diag in result.diagnostics)
    return 1 if has_errors else 0


def _failure_rows(result: DispatchResult) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for outcome in result.outcomes:
        match outcome:
            case ToolFailure(stderr=stderr):
                rows.append({"plugin": outcome.plugin, "kind": outcome.kind.value, "detail": stderr.strip()})
            case ParseFailure(detail=detail) | ExecutionFailure(detail=detail):
                rows.append({"plugin": outcome.plugin, "kind": outcome.kind.value, "detail": detail})
            case _:
                pass
    return rows


def _render_table(console: Console, result: DispatchResult) -> None:
    table = Table(title=str(result.file_path), box=box.SIMPLE, expand=True)
    table.add_column("Plugin", style="bold")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Message", overflow="fold")
    for diag in result.diagnostics:
        style = _SEVERITY_STYLES[diag.severity]
        table.add_row(
            diag.source or "-",
            str(diag.range.start.line + 1),
            str(diag.range.start.character),
            f"[{style}]{diag.severity.value}[/]",
            diag.message,
        )
    if result.diagnostics:
        console.print(table)
    else:
        console.print("[green]No diagnostics.[/green]")
    for row in _failure_rows(result):
        console.print(f"[red]{row['plugin']}[/red] {row['kind']}: {row['detail'] or '-'}")


def lint_command(
    file_path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, help="File to lint.")],
    root: ROOT_OPTION = None,
    config: CONFIG_OPTION = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON output.")] = False,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Typer entry point mirroring :func:`run_lint`."""

    settings = load_settings_option(config)
    configure_logging(level=level_from_flags(debug=False, verbose=verbose))
    options = ServerOptions.from_env(jobs=jobs, timeout_s=timeout)
    exit_code = run_lint(
        file_path,
        root or Path.cwd(),
        settings,
        session=CheckmateSession(options=options),
        as_json=as_json,
    )
    raise typer.Exit(code=exit_code)


__all__ = ["lint_command", "run_lint"]
