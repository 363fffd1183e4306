# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Logging configuration rendered through Rich.

stdout carries the LSP byte stream, so log records go to stderr or, in debug
mode, to a log file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, TextIO

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME: Final[str] = "checkmate"
DEFAULT_LOG_FILENAME: Final[str] = "checkmate.log"
_HANDLER_MARKER: Final[str] = "_checkmate_handler"
_OWNED_STREAM: Final[str] = "_checkmate_log_stream"


def default_log_file() -> Path:
    """Return the debug log location in the user's home directory."""

    return Path.home() / DEFAULT_LOG_FILENAME


def _build_console(log_file: Path | None) -> Console:
    """Return a console writing to stderr or to ``log_file``.

    Args:
        log_file: Optional destination file; opened in append mode.

    Returns:
        Console: Console without colour when writing to a file.
    """

    if log_file is None:
        return Console(stderr=True, soft_wrap=True)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    stream: TextIO = log_file.open("a", encoding="utf-8")
    return Console(file=stream, no_color=True, soft_wrap=True, width=160)


def configure_logging(
    *,
    level: int = logging.WARNING,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install a Rich handler on the ``checkmate`` logger hierarchy.

    Calling this twice replaces the previously installed handler rather than
    stacking a second one, and closes the log file the old handler wrote to.

    Args:
        level: Minimum level emitted by the package logger.
        log_file: Optional log file; stderr is used when omitted.
        stream: Explicit text stream overriding both stderr and ``log_file``.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()
            owned = getattr(handler, _OWNED_STREAM, None)
            if owned is not None:
                owned.close()

    console = Console(file=stream, no_color=True, soft_wrap=True) if stream is not None else _build_console(log_file)
    handler = RichHandler(
        console=console,
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    setattr(handler, _HANDLER_MARKER, True)
    if stream is None and log_file is not None:
        setattr(handler, _OWNED_STREAM, console.file)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def level_from_flags(*, debug: bool, verbose: bool = False) -> int:
    """Translate CLI verbosity flags into a logging level."""

    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


__all__ = [
    "DEFAULT_LOG_FILENAME",
    "ROOT_LOGGER_NAME",
    "configure_logging",
    "default_log_file",
    "level_from_flags",
]
