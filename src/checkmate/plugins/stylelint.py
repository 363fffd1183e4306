# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""stylelint adapter."""

from __future__ import annotations

from checkmate.parsers.base import JsonParser
from checkmate.parsers.javascript import parse_stylelint

from .base import Plugin


class StylelintPlugin(Plugin):
    """Run stylelint from the project's ``node_modules``; there is no global fallback."""

    plugin_id = "stylelint"
    executable = "stylelint"
    project_bin_dir = ("node_modules", ".bin")
    default_args = ("-f=json",)
    default_filetypes = ("css", "less", "sass")
    parser = JsonParser(parse_stylelint)
    global_fallback = False
