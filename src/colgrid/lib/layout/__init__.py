"""Column layout: grid sizing, grouping, and rendering."""

from colgrid.lib.layout.config import FillOrder, LayoutConfig, parse_fill_order
from colgrid.lib.layout.engine import Grid, LayoutResult, layout, render, resolve_grid
from colgrid.lib.layout.grouping import Group, group_cells, group_label, group_records
from colgrid.lib.layout.orchestrator import (
    layout_groups,
    plan_groups,
    render_groups,
    shared_column_count,
)

__all__ = [
    "FillOrder",
    "Grid",
    "Group",
    "LayoutConfig",
    "LayoutResult",
    "group_cells",
    "group_label",
    "group_records",
    "layout",
    "layout_groups",
    "parse_fill_order",
    "plan_groups",
    "render",
    "render_groups",
    "resolve_grid",
    "shared_column_count",
]
