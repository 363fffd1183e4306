# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language Server Protocol front end."""

from __future__ import annotations

from .convert import to_lsp_diagnostic, to_lsp_diagnostics, uri_to_path
from .session import CheckmateSession

__all__ = ["CheckmateSession", "to_lsp_diagnostic", "to_lsp_diagnostics", "uri_to_path"]
