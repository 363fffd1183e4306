# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the checkmate commands."""

from __future__ import annotations

import typer

from .doctor import doctor_command
from .lint import lint_command
from .serve import serve_command

app = typer.Typer(
    help="Per-document linting dispatcher speaking the Language Server Protocol.",
    add_completion=False,
    no_args_is_help=True,
)
app.command("serve")(serve_command)
app.command("lint")(lint_command)
app.command("doctor")(doctor_command)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
