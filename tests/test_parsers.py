# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering report parsers for the supported tools."""

import pytest
from fakes import ESLINT_REPORT, PHPCS_REPORT, PHPSTAN_REPORT, STYLELINT_REPORT

from checkmate.core.models import Position
from checkmate.core.severity import Severity
from checkmate.parsers import (
    JsonParser,
    ReportShapeError,
    parse_eslint,
    parse_phpcs,
    parse_phpstan,
    parse_stylelint,
)
from checkmate.parsers.php import PHPSTAN_COLUMN


def test_parse_eslint_shifts_line_and_keeps_column() -> None:
    diags = JsonParser(parse_eslint).parse(ESLINT_REPORT)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.range.start == Position(line=4, character=7)
    assert diag.range.is_point
    assert diag.severity is Severity.ERROR
    assert diag.message == "Missing semicolon."
    assert diag.source == "eslint"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (1, Severity.WARNING),
        (2, Severity.ERROR),
        (0, Severity.INFO),
        (3, Severity.INFO),
        ("2", Severity.INFO),
        (True, Severity.INFO),
        (None, Severity.INFO),
    ],
)
def test_parse_eslint_severity_table(raw: object, expected: Severity) -> None:
    payload = [{"filePath": "a.js", "messages": [{"severity": raw, "line": 1, "column": 0, "message": "m"}]}]

    (diag,) = parse_eslint(payload)

    assert diag.severity is expected


def test_parse_eslint_flattens_every_file_entry() -> None:
    payload = [
        {"filePath": "a.js", "messages": [{"severity": 1, "line": 1, "column": 1, "message": "one"}]},
        {"filePath": "b.js", "messages": []},
        {"filePath": "c.js", "messages": [{"severity": 2, "line": 9, "column": 3, "message": "two"}]},
    ]

    diags = parse_eslint(payload)

    assert [diag.message for diag in diags] == ["one", "two"]
    assert [diag.range.start.line for diag in diags] == [0, 8]


def test_parse_eslint_skips_messages_without_line() -> None:
    payload = [{"filePath": "a.js", "messages": [{"severity": 2, "message": "fatal parse error"}]}]

    assert parse_eslint(payload) == []


def test_parse_phpcs_scenario() -> None:
    diags = JsonParser(parse_phpcs).parse(PHPCS_REPORT)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.range.start == Position(line=2, character=2)
    assert diag.range.end == diag.range.start
    assert diag.severity is Severity.ERROR
    assert diag.message == "X"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("WARNING", Severity.WARNING), ("ERROR", Severity.ERROR), ("error", Severity.INFO), (None, Severity.INFO)],
)
def test_parse_phpcs_severity_table(raw: object, expected: Severity) -> None:
    payload = {"files": {"a.php": {"messages": [{"message": "m", "line": 1, "column": 1, "type": raw}]}}}

    (diag,) = parse_phpcs(payload)

    assert diag.severity is expected


def test_parse_phpstan_uses_fixed_column_and_error_severity() -> None:
    diags = JsonParser(parse_phpstan).parse(PHPSTAN_REPORT)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.range.start == Position(line=9, character=PHPSTAN_COLUMN)
    assert diag.range.is_point
    assert diag.severity is Severity.ERROR
    assert diag.message == "Bad call"


def test_parse_phpstan_without_files_yields_nothing() -> None:
    assert parse_phpstan({"totals": {"errors": 0}, "files": [], "errors": []}) == []


def test_parse_stylelint_produces_true_range() -> None:
    diags = JsonParser(parse_stylelint).parse(STYLELINT_REPORT)

    assert len(diags) == 1
    diag = diags[0]
    assert diag.range.start == Position(line=1, character=3)
    assert diag.range.end == Position(line=3, character=9)
    assert not diag.range.is_point
    assert diag.severity is Severity.WARNING
    assert diag.message == "Unexpected unit"


def test_parse_stylelint_missing_end_collapses_to_start() -> None:
    payload = [{"warnings": [{"line": 6, "column": 2, "severity": "error", "text": "boom"}]}]

    (diag,) = parse_stylelint(payload)

    assert diag.range.is_point
    assert diag.range.start == Position(line=5, character=2)
    assert diag.severity is Severity.ERROR


@pytest.mark.parametrize(
    "parser",
    [parse_eslint, parse_phpcs, parse_phpstan, parse_stylelint],
)
@pytest.mark.parametrize("stdout", ["", "   ", "not json", "{", "[1, 2"])
def test_malformed_output_raises_report_shape_error(parser, stdout: str) -> None:
    with pytest.raises(ReportShapeError):
        JsonParser(parser).parse(stdout)


def test_wrong_top_level_shape_is_rejected() -> None:
    with pytest.raises(ReportShapeError):
        parse_eslint({"files": {}})
    with pytest.raises(ReportShapeError):
        parse_phpcs([])
