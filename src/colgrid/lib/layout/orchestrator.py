"""Lay out several groups as one report sharing a single column count."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

import structlog

from colgrid.lib.layout.engine import (
    Grid,
    LayoutResult,
    auto_column_count,
    render_grid,
    resolve_grid,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from colgrid.lib.layout.config import LayoutConfig
    from colgrid.lib.layout.grouping import Group

logger = structlog.get_logger(__name__)


def shared_column_count(groups: Sequence[Group], config: LayoutConfig) -> int:
    """Return the column count every group starts from.

    AutoSize takes the smallest per-group candidate so the widest cell of
    every group still fits.
    """

    if not config.auto_size:
        return cast("int", config.column_count)
    return min(
        auto_column_count(
            group.cells,
            display_width=config.display_width,
            column_gap=config.column_gap,
            max_column_count=config.max_column_count,
        )
        for group in groups
    )


def plan_groups(groups: Sequence[Group], config: LayoutConfig) -> list[tuple[Group, Grid]]:
    """Resolve each group's grid in key order without rendering.

    A group's min-row adjustment replaces the running column count, so
    later groups start from the adjusted value rather than the shared one.
    """

    if not groups:
        return []
    config.validate()

    column_count = shared_column_count(groups, config)
    logger.debug("groups sharing column count", groups=len(groups), columns=column_count)

    planned: list[tuple[Group, Grid]] = []
    for group in groups:
        grid = resolve_grid(group.cells, config, column_count=column_count)
        column_count = grid.column_count
        planned.append((group, grid))
    return planned


def layout_groups(
    groups: Sequence[Group],
    config: LayoutConfig,
) -> list[tuple[Group, LayoutResult]]:
    """Lay out every group; any failure aborts before a result is returned."""

    return [
        (group, LayoutResult(grid=grid, lines=render_grid(group.cells, grid, config)))
        for group, grid in plan_groups(groups, config)
    ]


def format_header(group: Group) -> str:
    return f"  {group.label}: {group.key}"


def render_groups(groups: Sequence[Group], config: LayoutConfig) -> list[str]:
    """Render each group's header and block, framed by blank lines."""

    laid_out = layout_groups(groups, config)
    if not laid_out:
        return []

    lines = [""]
    for group, result in laid_out:
        lines.append(format_header(group))
        lines.extend(result.lines)
    return lines
