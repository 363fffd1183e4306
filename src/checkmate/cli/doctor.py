# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Installation diagnostics for checkmate plugins."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from ..config.models import parse_client_settings
from ..config.resolver import ResolutionResult
from ..core.errors import DiscoveryError
from ..core.logging import configure_logging, level_from_flags
from ..lsp.session import CheckmateSession
from .options import CONFIG_OPTION, ROOT_OPTION, VERBOSE_OPTION, load_settings_option


@dataclass(slots=True)
class PluginSummary:
    """Resolution status of one requested plugin."""

    plugin_id: str
    status: str
    ok: bool
    detail: str


def run_doctor(
    root: Path,
    settings: object,
    *,
    session: CheckmateSession | None = None,
    console: Console | None = None,
) -> int:
    """Resolve the requested plugins and render what got installed.

    When ``settings`` requests nothing, every registered plugin is checked
    with its defaults.

    Args:
        root: Project root directory.
        settings: ``checkmate.plugins`` payload.
        session: Optional preconfigured session.
        console: Optional ``rich`` console for output rendering.

    Returns:
        int: ``0`` when every requested plugin resolved, ``1`` otherwise.
    """

    console = console or Console()
    session = session or CheckmateSession()
    console.print(Rule("[bold cyan]checkmate Doctor[/bold cyan]"))

    if not parse_client_settings(settings):
        settings = {plugin_id: {} for plugin_id in session.registry}
    result = session.initialize(root, settings)

    summaries = _collect_summaries(result)
    status_table = Table(title="Plugins", box=box.SIMPLE, expand=True)
    status_table.add_column("Plugin", style="bold")
    status_table.add_column("Status")
    status_table.add_column("Details", overflow="fold")
    for summary in summaries:
        style = "green" if summary.ok else "red"
        status_table.add_row(summary.plugin_id, f"[{style}]{summary.status}[/]", summary.detail or "-")
    console.print(status_table)

    if result.installed:
        config_table = Table(title="Installed Configuration", box=box.SIMPLE, expand=True)
        config_table.add_column("Plugin", style="bold")
        config_table.add_column("Command", overflow="fold")
        config_table.add_column("Args", overflow="fold")
        config_table.add_column("Filetypes")
        for plugin_id in sorted(result.installed):
            config = result.installed[plugin_id]
            config_table.add_row(plugin_id, config.cmd, " ".join(config.args) or "-", ", ".join(config.filetypes))
        console.print(config_table)

    healthy = all(summary.ok for summary in summaries)
    overall_style = "green" if healthy else "red"
    console.print(Panel(f"[{overall_style}]Doctor completed[/]", border_style=overall_style))
    return 0 if healthy else 1


def _collect_summaries(result: ResolutionResult) -> list[PluginSummary]:
    summaries = [
        PluginSummary(plugin_id=plugin_id, status="installed", ok=True, detail=result.installed[plugin_id].cmd)
        for plugin_id in result.installed
    ]
    for error in result.errors:
        status = "missing" if isinstance(error, DiscoveryError) else "invalid"
        summaries.append(PluginSummary(plugin_id=error.plugin, status=status, ok=False, detail=error.message))
    return sorted(summaries, key=lambda summary: summary.plugin_id)


def doctor_command(
    root: ROOT_OPTION = None,
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
) -> None:
    """Typer entry point mirroring :func:`run_doctor`."""

    settings = load_settings_option(config)
    configure_logging(level=level_from_flags(debug=False, verbose=verbose))
    raise typer.Exit(code=run_doctor(root or Path.cwd(), settings))


__all__ = ["PluginSummary", "doctor_command", "run_doctor"]
