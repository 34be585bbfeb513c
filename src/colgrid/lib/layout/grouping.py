"""Partition cells into groups ordered by their key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from colgrid.lib.errors import SelectionError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

DEFAULT_GROUP_LABEL = "Group"


@dataclass(frozen=True, slots=True)
class Group:
    """One labelled block of cells sharing a key, in original relative order."""

    label: str
    key: str
    cells: tuple[str, ...]


def group_label(
    *,
    key_property: str | None = None,
    key_expression: str | None = None,
    override: str | None = None,
) -> str:
    """Pick the header label: explicit override, property name, then expression text."""

    for candidate in (override, key_property, key_expression):
        if candidate is not None and candidate.strip():
            return candidate.strip()
    return DEFAULT_GROUP_LABEL


def group_cells(
    pairs: Iterable[tuple[str, str]],
    *,
    label: str = DEFAULT_GROUP_LABEL,
) -> list[Group]:
    """Group ``(display, key)`` pairs by exact key, ordered by ascending key."""

    members: dict[str, list[str]] = {}
    for display, key in pairs:
        members.setdefault(key, []).append(display)
    return [Group(label=label, key=key, cells=tuple(members[key])) for key in sorted(members)]


def group_records(
    records: Iterable[object],
    *,
    display: Callable[[object], str],
    key: Callable[[object], str],
    label: str = DEFAULT_GROUP_LABEL,
) -> list[Group]:
    """Select display strings and keys for every record, then group them.

    All records are selected before any group is built, so one failing
    record aborts the whole grouping.
    """

    pairs: list[tuple[str, str]] = []
    for index, record in enumerate(records):
        try:
            pairs.append((display(record), key(record)))
        except Exception as exc:
            raise SelectionError(f"Record {index}: {exc}") from exc
    return group_cells(pairs, label=label)
