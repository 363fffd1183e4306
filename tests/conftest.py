# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from fakes import FakeRunner, install_local

from checkmate.core.logging import ROOT_LOGGER_NAME


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project root with every tool installed at its local convention path."""

    install_local(tmp_path, "vendor", "bin", "phpcs")
    install_local(tmp_path, "vendor", "bin", "phpstan")
    install_local(tmp_path, "node_modules", ".bin", "eslint")
    install_local(tmp_path, "node_modules", ".bin", "stylelint")
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by CLI commands so they do not leak between tests."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
