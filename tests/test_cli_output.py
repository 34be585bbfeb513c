"""Global option parsing, output emission, and logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from colgrid.cli.main import _extract_global_options
from colgrid.cli.output import OutputConfig, emit, normalize_output_format
from colgrid.lib.logging import level_for_verbosity
from colgrid.lib.ops.layout import LayoutWideOutput


def test_extract_global_options_strips_known_flags() -> None:
    cleaned, options = _extract_global_options(
        ["--format", "json", "-v", "layout", "wide", "--verbose", "--width", "9"]
    )

    assert cleaned == ["layout", "wide", "--width", "9"]
    assert options.output.format == "json"
    assert options.verbosity == 2


def test_extract_global_options_stops_at_double_dash() -> None:
    cleaned, options = _extract_global_options(["layout", "wide", "--", "--json"])

    assert cleaned == ["layout", "wide", "--", "--json"]
    assert options.output.format == "text"


def test_normalize_output_format() -> None:
    assert normalize_output_format(requested=None, json_mode=False) == "text"
    assert normalize_output_format(requested="JSON", json_mode=False) == "json"
    assert normalize_output_format(requested="text", json_mode=True) == "json"
    with pytest.raises(SystemExit):
        normalize_output_format(requested="yaml", json_mode=False)


def test_emit_text_and_json(capsys: pytest.CaptureFixture[str]) -> None:
    output = LayoutWideOutput(lines=("", "a  b  ", ""))

    emit(output, OutputConfig(format="text"))
    emit(output, OutputConfig(format="json"))

    text, payload = capsys.readouterr().out.split("\n\n", 1)
    assert text == "\na  b  "
    assert json.loads(payload) == {"lines": ["", "a  b  ", ""]}


def test_emit_skips_empty_text(capsys: pytest.CaptureFixture[str]) -> None:
    emit(LayoutWideOutput(lines=()), OutputConfig(format="text"))

    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    "verbosity,level",
    [
        (-1, logging.WARNING),
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ],
)
def test_level_for_verbosity(verbosity: int, level: int) -> None:
    assert level_for_verbosity(verbosity) == level
