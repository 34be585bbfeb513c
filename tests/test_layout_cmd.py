"""Payload construction for `colgrid layout` commands."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest

from colgrid.cli.layout_cmd import _build_input
from colgrid.lib.errors import ConfigurationError, SelectionError


def _options(**overrides: Any) -> dict[str, Any]:
    options: dict[str, Any] = {
        "items": (),
        "input_format": "lines",
        "property_name": None,
        "template": None,
        "group_by": None,
        "group_by_template": None,
        "label": None,
        "column": None,
        "auto_size": False,
        "max_column": None,
        "min_row": None,
        "order": "",
        "width": None,
        "gap": None,
    }
    options.update(overrides)
    return options


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_flat_items_become_cells() -> None:
    payload = _build_input(**_options(items=("b", "a")))

    assert payload.cells == ("b", "a")
    assert payload.group_keys == ()


def test_group_by_orders_cells_by_key(monkeypatch: pytest.MonkeyPatch) -> None:
    records = '[{"name": "b", "team": "y"}, {"name": "a", "team": "x"}, {"name": "c", "team": "y"}]'
    monkeypatch.setattr("sys.stdin", io.StringIO(records))

    payload = _build_input(**_options(input_format="json", group_by="team"))

    assert payload.cells == ("a", "b", "c")
    assert payload.group_keys == ("x", "y", "y")
    assert payload.group_label == "team"


def test_group_by_template_uses_expression_as_label(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('{"name": "a", "size": 1}\n'))

    payload = _build_input(**_options(input_format="jsonl", group_by_template="{size}"))

    assert payload.group_keys == ("1",)
    assert payload.group_label == "{size}"


def test_group_key_failure_aborts_grouping() -> None:
    with pytest.raises(SelectionError, match="Record 0"):
        _build_input(**_options(items=("a",), group_by="team"))


def test_group_by_and_template_are_exclusive() -> None:
    with pytest.raises(ConfigurationError, match="--group-by-template"):
        _build_input(**_options(items=("a",), group_by="k", group_by_template="{k}"))
