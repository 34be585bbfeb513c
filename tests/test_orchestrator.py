"""Multi-group layout sharing one column count."""

from __future__ import annotations

import pytest

from colgrid.lib.errors import LayoutError
from colgrid.lib.layout.config import FillOrder, LayoutConfig
from colgrid.lib.layout.engine import Grid
from colgrid.lib.layout.grouping import Group
from colgrid.lib.layout.orchestrator import plan_groups, render_groups, shared_column_count


def _group(key: str, cells: list[str], label: str = "Label") -> Group:
    return Group(label=label, key=key, cells=tuple(cells))


GROUP_A = _group("A", ["x", "yy", "zzz"])
GROUP_B = _group("B", ["q", "r"])


def test_shared_column_count_is_minimum_candidate() -> None:
    config = LayoutConfig(display_width=20)

    # A: min(20 // 4, 3) == 3, B: min(20 // 2, 2) == 2
    assert shared_column_count([GROUP_A, GROUP_B], config) == 2


def test_shared_column_count_respects_max_column_count() -> None:
    wide = _group("W", [str(index) for index in range(30)])

    assert shared_column_count([wide], LayoutConfig(display_width=80, max_column_count=4)) == 4


def test_custom_column_count_applies_to_every_group() -> None:
    config = LayoutConfig(column_count=3, display_width=30)

    planned = plan_groups([GROUP_A, GROUP_B], config)

    assert [grid for _, grid in planned] == [
        Grid(column_count=3, row_count=1, column_width=9),
        Grid(column_count=3, row_count=1, column_width=9),
    ]


def test_render_groups_emits_headers_and_framed_blocks() -> None:
    lines = render_groups([GROUP_A, GROUP_B], LayoutConfig(display_width=20))

    assert lines == [
        "",
        "  Label: A",
        "",
        "x         zzz       ",
        "yy                  ",
        "",
        "  Label: B",
        "",
        "q         r         ",
        "",
    ]


def test_row_major_groups() -> None:
    config = LayoutConfig(display_width=20, order=FillOrder.ROW)

    lines = render_groups([GROUP_A, GROUP_B], config)

    assert lines[3:5] == ["x         yy        ", "zzz                 "]


def test_no_groups_render_nothing() -> None:
    assert render_groups([], LayoutConfig()) == []


def test_min_row_adjustment_carries_into_later_groups() -> None:
    config = LayoutConfig(display_width=80, min_row_count=4)
    first = _group("a", list("abcdefghijkl"))
    second = _group("b", list("abcdefghij"))

    planned = plan_groups([first, second], config)

    # Shared start is min(12, 10) == 10. The first group drops to 12 // 4 == 3
    # columns, and the second group starts from 3, already meeting four rows.
    assert planned[0][1].column_count == 3
    assert planned[0][1].row_count == 4
    assert planned[1][1].column_count == 3
    assert planned[1][1].row_count == 4


def test_min_row_carry_over_depends_on_group_order() -> None:
    config = LayoutConfig(display_width=80, min_row_count=4)
    first = _group("a", list("abcdefghij"))
    second = _group("b", list("ABCDEFGHIJKL"))

    planned = plan_groups([first, second], config)

    assert planned[0][1].column_count == 2
    assert planned[0][1].row_count == 5
    assert planned[1][1].column_count == 2
    assert planned[1][1].row_count == 6


def test_layout_error_in_later_group_aborts_everything() -> None:
    config = LayoutConfig(column_count=4, display_width=10)
    groups = [_group("a", ["x"]), _group("b", ["much too long"])]

    with pytest.raises(LayoutError):
        render_groups(groups, config)


def test_each_group_truncates_against_its_own_cells() -> None:
    config = LayoutConfig(column_count=2, display_width=14)
    groups = [_group("a", ["short", "tiny"]), _group("b", ["abcdefghijkl", "ok"])]

    lines = render_groups(groups, config)

    assert lines[3] == "short  tiny   "
    assert lines[7] == "abc... ok     "
