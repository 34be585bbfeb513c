"""Grid sizing, truncation, and rendering for one flat cell sequence."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import structlog

from colgrid.lib.errors import LayoutError
from colgrid.lib.layout.config import FillOrder, LayoutConfig

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)

ELLIPSIS = "..."


@dataclass(frozen=True, slots=True)
class Grid:
    """Resolved dimensions for one layout pass."""

    column_count: int
    row_count: int
    column_width: int


@dataclass(frozen=True, slots=True)
class LayoutResult:
    grid: Grid | None
    lines: tuple[str, ...]


def max_cell_length(cells: Sequence[str]) -> int:
    return max((len(cell) for cell in cells), default=0)


def auto_column_count(
    cells: Sequence[str],
    *,
    display_width: int,
    column_gap: int,
    max_column_count: int | None = None,
) -> int:
    """Fit as many columns of the widest cell as the display allows.

    Never more columns than cells; capped by ``max_column_count`` when set.
    """

    per_column = max(1, max_cell_length(cells) + column_gap)
    count = max(1, display_width // per_column)
    count = min(count, len(cells))
    if max_column_count is not None:
        count = min(count, max_column_count)
    return count


def resolve_grid(
    cells: Sequence[str],
    config: LayoutConfig,
    *,
    column_count: int | None = None,
) -> Grid:
    """Resolve column count, row count, and column width for ``cells``.

    ``column_count`` overrides the nominal starting count; the group
    orchestrator passes the count shared across groups here. The min-row
    adjustment is a single recompute and need not hit ``min_row_count`` exactly.
    """

    total = len(cells)
    if total == 0:
        raise ValueError("Cannot size a grid for zero cells.")

    if column_count is None:
        if config.auto_size:
            column_count = auto_column_count(
                cells,
                display_width=config.display_width,
                column_gap=config.column_gap,
                max_column_count=config.max_column_count,
            )
        else:
            column_count = cast("int", config.column_count)

    row_count = math.ceil(total / column_count)
    if config.auto_size and config.min_row_count is not None and config.min_row_count > row_count:
        column_count = max(1, total // config.min_row_count)
        row_count = math.ceil(total / column_count)

    column_width = (config.display_width - column_count * config.column_gap) // column_count
    return Grid(column_count=column_count, row_count=row_count, column_width=column_width)


def truncate_cells(cells: Sequence[str], column_width: int) -> list[str]:
    """Shorten cells wider than ``column_width`` to end in an ellipsis."""

    if max_cell_length(cells) <= column_width:
        return list(cells)
    if column_width < len(ELLIPSIS):
        raise LayoutError("column width too small to display truncation ellipsis")

    keep = column_width - len(ELLIPSIS)
    return [
        f"{cell[:keep]}{ELLIPSIS}" if len(cell) > column_width else cell for cell in cells
    ]


def source_index(row: int, column: int, grid: Grid, order: FillOrder) -> int:
    if order == FillOrder.ROW:
        return column + row * grid.column_count
    return row + column * grid.row_count


def fill_grid(cells: Sequence[str], grid: Grid, order: FillOrder) -> list[list[str]]:
    """Map grid positions back to source cells; positions past the end are blank."""

    total = len(cells)
    rows: list[list[str]] = []
    for row in range(grid.row_count):
        current: list[str] = []
        for column in range(grid.column_count):
            index = source_index(row, column, grid, order)
            current.append(cells[index] if index < total else "")
        rows.append(current)
    return rows


def render_rows(rows: Sequence[Sequence[str]], grid: Grid, column_gap: int) -> list[str]:
    padded_width = grid.column_width + column_gap
    return ["".join(cell.ljust(padded_width) for cell in row) for row in rows]


def render_grid(cells: Sequence[str], grid: Grid, config: LayoutConfig) -> tuple[str, ...]:
    """Truncate, fill, and render ``cells`` into an already resolved grid."""

    fitted = truncate_cells(cells, grid.column_width)
    rows = fill_grid(fitted, grid, config.order)
    return ("", *render_rows(rows, grid, config.column_gap), "")


def layout(
    cells: Sequence[str],
    config: LayoutConfig,
    *,
    column_count: int | None = None,
) -> LayoutResult:
    """Lay out ``cells`` and return the grid plus framed output lines."""

    if not cells:
        return LayoutResult(grid=None, lines=())

    grid = resolve_grid(cells, config, column_count=column_count)
    lines = render_grid(cells, grid, config)
    logger.debug(
        "layout resolved",
        cells=len(cells),
        columns=grid.column_count,
        rows=grid.row_count,
        column_width=grid.column_width,
        order=str(config.order),
    )
    return LayoutResult(grid=grid, lines=lines)


def render(cells: Sequence[str], config: LayoutConfig) -> list[str]:
    """Render ``cells`` as display lines, framed by one blank line on each side."""

    return list(layout(cells, config.validate()).lines)
