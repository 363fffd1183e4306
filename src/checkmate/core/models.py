# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the checkmate package."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from checkmate.core.severity import Severity

type JsonScalar = str | int | float | bool | None
type JsonValue = JsonScalar | list[JsonValue] | dict[str, JsonValue]


class Position(BaseModel):
    """Zero-indexed line/character pair matching the LSP coordinate system."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """Half-open range between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def point(cls, line: int, character: int) -> Range:
        """Return a degenerate range where start and end coincide.

        Args:
            line: Zero-indexed line number.
            character: Column offset used verbatim for both ends.

        Returns:
            Range: Range whose start and end positions are identical.
        """

        position = Position(line=line, character=character)
        return cls(start=position, end=position)

    @property
    def is_point(self) -> bool:
        """Return ``True`` when the range starts and ends at the same position."""

        return self.start == self.end


class Diagnostic(BaseModel):
    """Canonical finding published to the editor regardless of the originating tool."""

    model_config = ConfigDict(frozen=True)

    range: Range
    severity: Severity
    message: str
    source: str | None = None


class PluginConfig(BaseModel):
    """Invocation settings for a plugin: executable, arguments and handled extensions."""

    model_config = ConfigDict(frozen=True)

    cmd: str
    args: tuple[str, ...] = Field(default_factory=tuple)
    filetypes: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("filetypes", mode="before")
    @classmethod
    def _strip_dots(cls, value: object) -> object:
        """Accept extensions written with a leading dot (``.js``) as well as bare ones."""

        if isinstance(value, (list, tuple)):
            return tuple(str(item).lstrip(".") if isinstance(item, str) else item for item in value)
        return value

    def handles(self, extension: str) -> bool:
        """Return ``True`` when ``extension`` (without dot) is one of the configured filetypes."""

        return extension in self.filetypes

    def command_for(self, file_path: str) -> tuple[str, ...]:
        """Return the full invocation with ``file_path`` appended last."""

        return (self.cmd, *self.args, file_path)


class PluginOverride(BaseModel):
    """Client supplied override for a single plugin, already split into tokens."""

    model_config = ConfigDict(frozen=True)

    cmd: str = ""
    args: tuple[str, ...] = Field(default_factory=tuple)
    filetypes: tuple[str, ...] = Field(default_factory=tuple)


class InstalledPluginSet(Mapping[str, PluginConfig]):
    """Read-only mapping of plugin id to resolved configuration for one session."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, PluginConfig] | None = None) -> None:
        """Freeze ``entries`` into an immutable view.

        Args:
            entries: Resolved plugin configurations keyed by plugin id.
        """

        self._entries: Mapping[str, PluginConfig] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, plugin_id: str) -> PluginConfig:
        return self._entries[plugin_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"InstalledPluginSet({dict(self._entries)!r})"


class OutcomeKind(str, Enum):
    """Enumerate the ways a single plugin invocation can end."""

    DIAGNOSTICS = "diagnostics"
    TOOL_FAILURE = "tool_failure"
    PARSE_FAILURE = "parse_failure"
    EXECUTION_FAILURE = "execution_failure"


class _OutcomeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    plugin: str
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """Return ``True`` when the invocation produced a usable report."""

        return False


class DiagnosticsReport(_OutcomeBase):
    """Report parsed successfully; ``diagnostics`` may still be empty."""

    kind: Literal[OutcomeKind.DIAGNOSTICS] = OutcomeKind.DIAGNOSTICS

    @property
    def ok(self) -> bool:
        return True


class ToolFailure(_OutcomeBase):
    """The tool wrote to stderr, so its stdout is discarded for this pass."""

    kind: Literal[OutcomeKind.TOOL_FAILURE] = OutcomeKind.TOOL_FAILURE
    stderr: str


class ParseFailure(_OutcomeBase):
    """The tool's stdout did not match the expected report shape."""

    kind: Literal[OutcomeKind.PARSE_FAILURE] = OutcomeKind.PARSE_FAILURE
    detail: str = ""


class ExecutionFailure(_OutcomeBase):
    """The tool could not be spawned, crashed its adapter, or timed out."""

    kind: Literal[OutcomeKind.EXECUTION_FAILURE] = OutcomeKind.EXECUTION_FAILURE
    detail: str


type ReportOutcome = DiagnosticsReport | ToolFailure | ParseFailure | ExecutionFailure


__all__ = [
    "Diagnostic",
    "DiagnosticsReport",
    "ExecutionFailure",
    "InstalledPluginSet",
    "JsonScalar",
    "JsonValue",
    "OutcomeKind",
    "ParseFailure",
    "PluginConfig",
    "PluginOverride",
    "Position",
    "Range",
    "ReportOutcome",
    "ToolFailure",
]
