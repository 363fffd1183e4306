# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Typer option declarations and helpers for checkmate commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

ROOT_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--root",
        "-r",
        help="Project root for discovery and the tools' working directory (default: current directory).",
        file_okay=False,
    ),
]

CONFIG_OPTION = Annotated[
    str | None,
    typer.Option(
        "--config",
        "-c",
        help="Plugin settings as a JSON object, or the path of a JSON file holding it.",
    ),
]

JOBS_OPTION = Annotated[
    int | None,
    typer.Option("--jobs", "-j", min=1, help="Plugins run in parallel per save."),
]

TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", min=0.001, help="Seconds before a tool invocation is killed."),
]

DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Log at debug level to ~/checkmate.log."),
]

VERBOSE_OPTION = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log discovery and dispatch steps to stderr."),
]


def load_settings_option(raw: str | None) -> object:
    """Decode the ``--config`` option into a plugin settings payload.

    Args:
        raw: JSON text, a path to a JSON file, or ``None``.

    Returns:
        object: Decoded payload; an empty mapping when ``raw`` is ``None``.

    Raises:
        typer.BadParameter: When the value is not valid JSON.
    """

    if raw is None:
        return {}
    text = raw
    if not raw.lstrip().startswith(("{", "[")):
        candidate = Path(raw)
        if not candidate.is_file():
            raise typer.BadParameter(f"{raw} is neither JSON nor a readable file", param_hint="--config")
        text = candidate.read_text(encoding="utf-8")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--config") from exc


__all__ = [
    "CONFIG_OPTION",
    "DEBUG_OPTION",
    "JOBS_OPTION",
    "ROOT_OPTION",
    "TIMEOUT_OPTION",
    "VERBOSE_OPTION",
    "load_settings_option",
]
