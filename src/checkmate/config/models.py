# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models: client plugin overrides and server runtime options."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from checkmate.core.models import PluginOverride

CONFIG_SECTION: Final[str] = "checkmate.plugins"
ARGS_SEPARATOR: Final[str] = " "
FILETYPES_SEPARATOR: Final[str] = ","
JOBS_ENV: Final[str] = "CHECKMATE_JOBS"
TIMEOUT_ENV: Final[str] = "CHECKMATE_TIMEOUT"
DEFAULT_TIMEOUT_S: Final[float] = 30.0
DEFAULT_JOBS: Final[int] = 4


def split_tokens(raw: str, separator: str) -> tuple[str, ...]:
    """Split ``raw`` on ``separator`` discarding empty tokens.

    Naive splitting of ``""`` yields ``[""]``; empty tokens are dropped so an
    empty override string means "no override" instead of a blank argument.

    Args:
        raw: Delimited string supplied by the client.
        separator: Single delimiter character.

    Returns:
        tuple[str, ...]: Non-empty tokens in their original order.
    """

    return tuple(token for token in raw.split(separator) if token)


class ClientOverride(BaseModel):
    """Raw per-plugin override as the editor sends it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    cmd: str = ""
    args: str = ""
    filetypes: str = ""

    @field_validator("cmd", "args", "filetypes", mode="before")
    @classmethod
    def _strings_only(cls, value: object) -> str:
        """Treat anything but a string as an absent field."""

        return value if isinstance(value, str) else ""

    def to_override(self) -> PluginOverride:
        """Return the override with ``args`` and ``filetypes`` split into tokens."""

        return PluginOverride(
            cmd=self.cmd.strip(),
            args=split_tokens(self.args, ARGS_SEPARATOR),
            filetypes=tuple(
                token.strip().lstrip(".")
                for token in split_tokens(self.filetypes, FILETYPES_SEPARATOR)
                if token.strip().lstrip(".")
            ),
        )


def parse_client_settings(raw: object) -> dict[str, PluginOverride]:
    """Parse the ``checkmate.plugins`` configuration section.

    ``raw`` is either a single mapping or the list of sections returned by
    ``workspace/configuration``. Non-mapping sections are ignored; a plugin
    whose value is not a mapping is requested without an override.

    Args:
        raw: Configuration payload received from the editor.

    Returns:
        dict[str, PluginOverride]: Requested plugin ids with their overrides.
    """

    sections = raw if isinstance(raw, list) else [raw]
    requested: dict[str, PluginOverride] = {}
    for section in sections:
        if not isinstance(section, Mapping):
            continue
        for plugin_id, value in section.items():
            key = str(plugin_id)
            if not isinstance(value, Mapping):
                requested[key] = PluginOverride()
                continue
            requested[key] = ClientOverride.model_validate(dict(value)).to_override()
    return requested


class ServerOptions(BaseModel):
    """Runtime options for the server and the one-shot CLI commands."""

    model_config = ConfigDict(frozen=True)

    jobs: int = Field(default=DEFAULT_JOBS, ge=1)
    timeout_s: float | None = Field(default=DEFAULT_TIMEOUT_S, gt=0)
    config_section: str = CONFIG_SECTION
    debug: bool = False
    log_file: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> ServerOptions:
        """Build options from ``CHECKMATE_*`` environment variables and explicit overrides.

        Explicit overrides whose value is ``None`` are ignored so CLI options
        left unset fall back to the environment and then to the defaults.

        Args:
            environ: Environment mapping; defaults to :data:`os.environ`.
            **overrides: Field values taking precedence over the environment.

        Returns:
            ServerOptions: Validated options.

        Raises:
            ValidationError: When a value is out of range.
        """

        env = os.environ if environ is None else environ
        payload: dict[str, object] = {}
        if env.get(JOBS_ENV):
            payload["jobs"] = env[JOBS_ENV]
        if env.get(TIMEOUT_ENV):
            payload["timeout_s"] = env[TIMEOUT_ENV]
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(payload)


__all__ = [
    "ARGS_SEPARATOR",
    "CONFIG_SECTION",
    "ClientOverride",
    "DEFAULT_JOBS",
    "DEFAULT_TIMEOUT_S",
    "FILETYPES_SEPARATOR",
    "JOBS_ENV",
    "ServerOptions",
    "TIMEOUT_ENV",
    "parse_client_settings",
    "split_tokens",
]
