# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for Rich based logging configuration."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from rich.logging import RichHandler

from checkmate.core.logging import ROOT_LOGGER_NAME, configure_logging, default_log_file, level_from_flags


def _rich_handlers() -> list[logging.Handler]:
    return [handler for handler in logging.getLogger(ROOT_LOGGER_NAME).handlers if isinstance(handler, RichHandler)]


def test_configure_logging_replaces_previous_handler() -> None:
    configure_logging(stream=io.StringIO())
    configure_logging(stream=io.StringIO())

    assert len(_rich_handlers()) == 1


def test_configure_logging_writes_to_stream() -> None:
    stream = io.StringIO()
    configure_logging(level=logging.INFO, stream=stream)

    logging.getLogger("checkmate.plugins.base").info("Plugin phpcs found")

    assert "Plugin phpcs found" in stream.getvalue()


def test_configure_logging_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "checkmate.log"
    logger = configure_logging(level=logging.DEBUG, log_file=log_file)

    logging.getLogger("checkmate.lsp.server").debug("debug line")
    for handler in _rich_handlers():
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "debug line" in log_file.read_text(encoding="utf-8")


def test_level_from_flags() -> None:
    assert level_from_flags(debug=True) == logging.DEBUG
    assert level_from_flags(debug=False, verbose=True) == logging.INFO
    assert level_from_flags(debug=False) == logging.WARNING


def test_default_log_file_lives_in_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_log_file() == tmp_path / "checkmate.log"


def test_reconfiguring_closes_previous_log_file(tmp_path: Path) -> None:
    configure_logging(log_file=tmp_path / "first.log")
    (first,) = _rich_handlers()
    first_stream = first.console.file

    configure_logging(stream=io.StringIO())

    assert first_stream.closed
