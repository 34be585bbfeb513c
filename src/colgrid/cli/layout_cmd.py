"""CLI command handlers for layout.* operations."""

from __future__ import annotations

import shutil
import sys
from collections.abc import Callable
from functools import partial
from typing import Annotated, Any, cast

from cyclopts import Parameter

from colgrid.lib.config.settings import load_config
from colgrid.lib.errors import ConfigurationError
from colgrid.lib.layout.grouping import group_label, group_records
from colgrid.lib.ops.layout import (
    LayoutWideInput,
    layout_plan_sync,
    layout_wide_sync,
)
from colgrid.lib.ops.registry import get_all_operations
from colgrid.lib.selection import (
    InputFormat,
    Selector,
    default_selector,
    property_selector,
    read_records,
    select_cells,
    template_selector,
)

Emitter = Callable[[Any], None]

_INPUT_FORMATS = ("lines", "json", "jsonl")


def _terminal_width() -> int:
    return shutil.get_terminal_size(fallback=(80, 24)).columns


def _load_records(items: tuple[str, ...], input_format: str) -> list[object]:
    normalized = input_format.strip().lower()
    if normalized not in _INPUT_FORMATS:
        raise ConfigurationError(
            f"--input must be one of: {', '.join(_INPUT_FORMATS)}; got {input_format!r}."
        )
    if items:
        return list(items)
    if sys.stdin.isatty():
        return []
    return read_records(sys.stdin.read(), cast("InputFormat", normalized))


def _exclusive(first: tuple[str, object], second: tuple[str, object]) -> None:
    if first[1] is not None and second[1] is not None:
        raise ConfigurationError(f"Cannot combine {first[0]} with {second[0]}.")


def _display_selector(property_name: str | None, template: str | None) -> Selector:
    _exclusive(("--property", property_name), ("--template", template))
    if property_name is not None:
        return property_selector(property_name)
    if template is not None:
        return template_selector(template)
    return default_selector(load_config().default_properties)


def _build_input(
    *,
    items: tuple[str, ...],
    input_format: str,
    property_name: str | None,
    template: str | None,
    group_by: str | None,
    group_by_template: str | None,
    label: str | None,
    column: int | None,
    auto_size: bool,
    max_column: int | None,
    min_row: int | None,
    order: str,
    width: int | None,
    gap: int | None,
) -> LayoutWideInput:
    if auto_size and column is not None:
        raise ConfigurationError("Cannot combine --column with --auto-size.")
    _exclusive(("--group-by", group_by), ("--group-by-template", group_by_template))

    records = _load_records(items, input_format)
    display = _display_selector(property_name, template)
    if group_by is None and group_by_template is None:
        return LayoutWideInput(
            cells=tuple(select_cells(records, display)),
            column=column,
            max_column=max_column,
            min_row=min_row,
            order=order,
            width=width,
            column_gap=gap,
        )

    key_selector = (
        property_selector(group_by)
        if group_by is not None
        else template_selector(cast("str", group_by_template))
    )
    resolved_label = group_label(
        key_property=group_by,
        key_expression=group_by_template,
        override=label,
    )
    groups = group_records(records, display=display, key=key_selector, label=resolved_label)
    return LayoutWideInput(
        cells=tuple(cell for group in groups for cell in group.cells),
        group_keys=tuple(group.key for group in groups for _ in group.cells),
        group_label=resolved_label,
        column=column,
        max_column=max_column,
        min_row=min_row,
        order=order,
        width=width,
        column_gap=gap,
    )


def _layout_command(
    emit: Emitter,
    handler: Callable[..., object],
    items: Annotated[
        tuple[str, ...],
        Parameter(help="Cells to lay out; read from stdin when omitted."),
    ] = (),
    input_format: Annotated[
        str,
        Parameter(name="--input", help="Stdin record format: lines, json, or jsonl."),
    ] = "lines",
    property_name: Annotated[
        str | None,
        Parameter(name=["--property", "-p"], help="Record property (dotted path) to display."),
    ] = None,
    template: Annotated[
        str | None,
        Parameter(name=["--template", "-t"], help="Format string applied to each record."),
    ] = None,
    group_by: Annotated[
        str | None,
        Parameter(name=["--group-by", "-g"], help="Record property to group cells by."),
    ] = None,
    group_by_template: Annotated[
        str | None,
        Parameter(name="--group-by-template", help="Format string producing the group key."),
    ] = None,
    label: Annotated[
        str | None,
        Parameter(name="--group-label", help="Override the group header label."),
    ] = None,
    column: Annotated[
        int | None,
        Parameter(name=["--column", "-c"], help="Explicit number of columns."),
    ] = None,
    auto_size: Annotated[
        bool,
        Parameter(name=["--auto-size", "-a"], help="Size columns from the data (default)."),
    ] = False,
    max_column: Annotated[
        int | None,
        Parameter(name="--max-column", help="Upper bound on auto-sized columns."),
    ] = None,
    min_row: Annotated[
        int | None,
        Parameter(name="--min-row", help="Lower bound on auto-sized rows."),
    ] = None,
    order: Annotated[
        str,
        Parameter(name=["--order", "-o"], help="Fill order: column or row."),
    ] = "",
    width: Annotated[
        int | None,
        Parameter(name=["--width", "-w"], help="Display width; defaults to the terminal."),
    ] = None,
    gap: Annotated[
        int | None,
        Parameter(name="--gap", help="Spaces after each column."),
    ] = None,
) -> None:
    payload = _build_input(
        items=items,
        input_format=input_format,
        property_name=property_name,
        template=template,
        group_by=group_by,
        group_by_template=group_by_template,
        label=label,
        column=column,
        auto_size=auto_size,
        max_column=max_column,
        min_row=min_row,
        order=order,
        width=width,
        gap=gap,
    )
    emit(handler(payload, fallback_width=_terminal_width()))


def register_layout_commands(app: Any, emit: Emitter) -> tuple[set[str], dict[str, str]]:
    handlers: dict[str, Callable[[], Callable[..., None]]] = {
        "layout.wide": lambda: partial(_layout_command, emit, layout_wide_sync),
        "layout.plan": lambda: partial(_layout_command, emit, layout_plan_sync),
    }

    registered: set[str] = set()
    descriptions: dict[str, str] = {}

    for op in get_all_operations():
        if op.cli_group != "layout" or op.mcp_only:
            continue
        handler_factory = handlers.get(op.name)
        if handler_factory is None:
            raise ValueError(f"No CLI handler registered for operation '{op.name}'")
        handler = handler_factory()
        handler.__name__ = f"cmd_{op.cli_group}_{op.cli_name}"
        app.command(handler, name=op.cli_name, help=op.description)
        registered.add(op.cli_path)
        descriptions[op.name] = op.description

    return registered, descriptions
