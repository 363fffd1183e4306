# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PHPStan adapter."""

from __future__ import annotations

from checkmate.parsers.base import JsonParser
from checkmate.parsers.php import parse_phpstan

from .base import Plugin


class PhpstanPlugin(Plugin):
    """Run ``phpstan analyse`` from ``vendor/bin`` or, failing that, from ``PATH``."""

    plugin_id = "phpstan"
    executable = "phpstan"
    project_bin_dir = ("vendor", "bin")
    default_args = ("analyse", "--error-format=json")
    default_filetypes = ("php",)
    parser = JsonParser(parse_phpstan)
