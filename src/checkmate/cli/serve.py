# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command starting the stdio language server."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config.models import ServerOptions
from ..lsp.server import start
from .options import DEBUG_OPTION, JOBS_OPTION, TIMEOUT_OPTION


def serve_command(
    debug: DEBUG_OPTION = False,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", dir_okay=False, help="Write logs to this file instead of stderr."),
    ] = None,
    jobs: JOBS_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
) -> None:
    """Serve the Language Server Protocol over stdin/stdout."""

    options = ServerOptions.from_env(jobs=jobs, timeout_s=timeout, debug=debug, log_file=log_file)
    start(options)


__all__ = ["serve_command"]
