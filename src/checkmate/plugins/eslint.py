# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint adapter."""

from __future__ import annotations

from checkmate.parsers.base import JsonParser
from checkmate.parsers.javascript import parse_eslint

from .base import Plugin


class EslintPlugin(Plugin):
    """Run ESLint from the project's ``node_modules``; there is no global fallback."""

    plugin_id = "eslint"
    executable = "eslint"
    project_bin_dir = ("node_modules", ".bin")
    default_args = ("-f=json",)
    default_filetypes = ("js", "tsx", "vue", "svelte")
    parser = JsonParser(parse_eslint)
    global_fallback = False
