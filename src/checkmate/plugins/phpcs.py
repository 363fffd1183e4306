# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PHP_CodeSniffer adapter."""

from __future__ import annotations

from checkmate.parsers.base import JsonParser
from checkmate.parsers.php import parse_phpcs

from .base import Plugin


class PhpcsPlugin(Plugin):
    """Run phpcs from ``vendor/bin`` or, failing that, from ``PATH``."""

    plugin_id = "phpcs"
    executable = "phpcs"
    project_bin_dir = ("vendor", "bin")
    default_args = ("--report=json",)
    default_filetypes = ("php",)
    parser = JsonParser(parse_phpcs)
