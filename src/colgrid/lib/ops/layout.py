"""Wide-listing layout operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from colgrid.lib.config.settings import ColgridConfig, load_config
from colgrid.lib.errors import ConfigurationError
from colgrid.lib.layout.config import LayoutConfig, parse_fill_order
from colgrid.lib.layout.engine import Grid, layout, resolve_grid, truncate_cells
from colgrid.lib.layout.grouping import DEFAULT_GROUP_LABEL, Group, group_cells
from colgrid.lib.layout.orchestrator import plan_groups, render_groups
from colgrid.lib.ops.registry import OperationSpec, operation

logger = structlog.get_logger(__name__)

DEFAULT_DISPLAY_WIDTH = 80


@dataclass(frozen=True, slots=True)
class LayoutWideInput:
    cells: tuple[str, ...] = ()
    group_keys: tuple[str, ...] = ()
    group_label: str = ""
    column: int | None = None
    max_column: int | None = None
    min_row: int | None = None
    order: str = ""
    width: int | None = None
    column_gap: int | None = None
    repo_root: str | None = None


@dataclass(frozen=True, slots=True)
class LayoutWideOutput:
    lines: tuple[str, ...]

    def format_text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class GroupPlan:
    key: str
    cells: int
    column_count: int
    row_count: int
    column_width: int
    truncated: int = 0


@dataclass(frozen=True, slots=True)
class LayoutPlanOutput:
    """Resolved sizing for a layout call, one entry per group."""

    mode: str
    order: str
    display_width: int
    column_gap: int
    groups: tuple[GroupPlan, ...] = ()

    def format_text(self) -> str:
        from colgrid.cli.format_helpers import kv_block, tabular

        header = kv_block(
            [
                ("mode", self.mode),
                ("order", self.order),
                ("display_width", str(self.display_width)),
                ("column_gap", str(self.column_gap)),
            ]
        )
        if not self.groups:
            return f"{header}\n(no cells)"
        rows = [["GROUP", "CELLS", "COLUMNS", "ROWS", "WIDTH", "TRUNCATED"]]
        rows.extend(
            [
                plan.key or "-",
                str(plan.cells),
                str(plan.column_count),
                str(plan.row_count),
                str(plan.column_width),
                str(plan.truncated),
            ]
            for plan in self.groups
        )
        return f"{header}\n\n{tabular(rows)}"


def _repo_root(repo_root: str | None) -> Path | None:
    if repo_root is None:
        return None
    return Path(repo_root).expanduser().resolve()


def _resolve_layout_config(
    payload: LayoutWideInput,
    settings: ColgridConfig,
    fallback_width: int,
) -> LayoutConfig:
    width = payload.width
    if width is None:
        width = settings.display_width
    if width is None:
        width = fallback_width

    config = LayoutConfig(
        column_count=payload.column,
        max_column_count=payload.max_column,
        min_row_count=payload.min_row,
        order=parse_fill_order(payload.order) if payload.order.strip() else settings.order,
        display_width=width,
        column_gap=settings.column_gap if payload.column_gap is None else payload.column_gap,
    )
    return config.validate()


def _groups(payload: LayoutWideInput) -> list[Group] | None:
    if not payload.group_keys:
        return None
    if len(payload.group_keys) != len(payload.cells):
        raise ConfigurationError(
            f"Expected one group key per cell: got {len(payload.group_keys)} keys "
            f"for {len(payload.cells)} cells."
        )
    label = payload.group_label.strip() or DEFAULT_GROUP_LABEL
    return group_cells(zip(payload.cells, payload.group_keys, strict=True), label=label)


def _group_plan(key: str, cells: tuple[str, ...], grid: Grid) -> GroupPlan:
    # Same check the render path runs, so a plan never promises an unrenderable grid.
    fitted = truncate_cells(cells, grid.column_width)
    return GroupPlan(
        key=key,
        cells=len(cells),
        column_count=grid.column_count,
        row_count=grid.row_count,
        column_width=grid.column_width,
        truncated=sum(1 for before, after in zip(cells, fitted, strict=True) if before != after),
    )


def layout_wide_sync(
    payload: LayoutWideInput,
    *,
    fallback_width: int = DEFAULT_DISPLAY_WIDTH,
) -> LayoutWideOutput:
    """Render cells, grouped when ``group_keys`` is given.

    ``fallback_width`` applies only when neither the payload nor the config
    names a display width; the CLI passes the terminal width here.
    """

    settings = load_config(_repo_root(payload.repo_root))
    config = _resolve_layout_config(payload, settings, fallback_width)
    groups = _groups(payload)
    if groups is None:
        lines = layout(payload.cells, config).lines
    else:
        lines = tuple(render_groups(groups, config))
    logger.info("layout rendered", cells=len(payload.cells), lines=len(lines))
    return LayoutWideOutput(lines=tuple(lines))


def layout_plan_sync(
    payload: LayoutWideInput,
    *,
    fallback_width: int = DEFAULT_DISPLAY_WIDTH,
) -> LayoutPlanOutput:
    settings = load_config(_repo_root(payload.repo_root))
    config = _resolve_layout_config(payload, settings, fallback_width)
    groups = _groups(payload)

    plans: list[GroupPlan] = []
    if groups is None:
        if payload.cells:
            grid = resolve_grid(payload.cells, config)
            plans.append(_group_plan("", payload.cells, grid))
    else:
        plans.extend(
            _group_plan(group.key, group.cells, grid)
            for group, grid in plan_groups(groups, config)
        )

    return LayoutPlanOutput(
        mode="auto" if config.auto_size else "custom",
        order=config.order.value,
        display_width=config.display_width,
        column_gap=config.column_gap,
        groups=tuple(plans),
    )


async def layout_wide(payload: LayoutWideInput) -> LayoutWideOutput:
    return layout_wide_sync(payload)


async def layout_plan(payload: LayoutWideInput) -> LayoutPlanOutput:
    return layout_plan_sync(payload)


operation(
    OperationSpec[LayoutWideInput, LayoutWideOutput](
        name="layout.wide",
        handler=layout_wide,
        sync_handler=layout_wide_sync,
        input_type=LayoutWideInput,
        output_type=LayoutWideOutput,
        cli_group="layout",
        cli_name="wide",
        mcp_name="layout_wide",
        description="Arrange cells into columns sized to the display width.",
    )
)

operation(
    OperationSpec[LayoutWideInput, LayoutPlanOutput](
        name="layout.plan",
        handler=layout_plan,
        sync_handler=layout_plan_sync,
        input_type=LayoutWideInput,
        output_type=LayoutPlanOutput,
        cli_group="layout",
        cli_name="plan",
        mcp_name="layout_plan",
        description="Show the resolved column count, row count, and column width.",
    )
)
