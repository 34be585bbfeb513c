"""Record-to-display-string selectors used by the CLI and grouping.

The layout core only sees strings. Everything here turns caller records
(plain lines or decoded JSON values) into those strings, either by a
property path, a ``str.format`` template, or default-property discovery.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Literal, cast

from colgrid.lib.errors import SelectionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

Selector = Callable[[object], str]
InputFormat = Literal["lines", "json", "jsonl"]

DEFAULT_PROPERTIES: tuple[str, ...] = ("name", "Name", "id", "Id", "key", "title")
_MISSING = object()


def display_string(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _lookup(record: object, name: str) -> object:
    if isinstance(record, Mapping):
        return cast("Mapping[str, object]", record).get(name, _MISSING)
    return getattr(record, name, _MISSING)


def resolve_property(record: object, path: str) -> object:
    """Follow a dotted property path through mappings and attributes."""

    current = record
    for part in path.split("."):
        current = _lookup(current, part)
        if current is _MISSING:
            raise SelectionError(f"Property '{path}' not found on record.")
    return current


def property_selector(path: str) -> Selector:
    normalized = path.strip()
    if not normalized:
        raise SelectionError("Property name must not be empty.")

    def _select(record: object) -> str:
        return display_string(resolve_property(record, normalized))

    return _select


class _RecordView(Mapping[str, object]):
    """Read-only mapping over a record for ``str.format_map``.

    ``_`` refers to the record itself so scalar records can be formatted.
    """

    def __init__(self, record: object) -> None:
        self._record = record

    def __getitem__(self, key: str) -> object:
        if key == "_":
            return self._record
        value = _lookup(self._record, key)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __iter__(self) -> Iterator[str]:
        if isinstance(self._record, Mapping):
            return iter(cast("Mapping[str, object]", self._record))
        return iter(())

    def __len__(self) -> int:
        if isinstance(self._record, Mapping):
            return len(cast("Mapping[str, object]", self._record))
        return 0


def template_selector(template: str) -> Selector:
    """Select by formatting ``template`` against each record's fields."""

    def _select(record: object) -> str:
        try:
            return template.format_map(_RecordView(record))
        except KeyError as exc:
            raise SelectionError(
                f"Template {template!r} references missing field {exc.args[0]!r}."
            ) from exc
        except (AttributeError, IndexError, ValueError) as exc:
            raise SelectionError(f"Template {template!r} failed: {exc}") from exc

    return _select


def default_property(
    record: object,
    candidates: Sequence[str] = DEFAULT_PROPERTIES,
) -> str | None:
    """Discover which property displays a record, or None for scalars."""

    for candidate in candidates:
        if _lookup(record, candidate) is not _MISSING:
            return candidate
    if isinstance(record, Mapping):
        for key in cast("Mapping[str, object]", record):
            return str(key)
    return None


def default_selector(candidates: Sequence[str] = DEFAULT_PROPERTIES) -> Selector:
    def _select(record: object) -> str:
        if isinstance(record, (str, int, float, bool)) or record is None:
            return display_string(record)
        name = default_property(record, candidates)
        if name is None:
            return display_string(record)
        return display_string(_lookup(record, name))

    return _select


def select_cells(records: Iterable[object], selector: Selector) -> list[str]:
    """Apply ``selector`` to every record; any failure aborts the whole selection."""

    cells: list[str] = []
    for index, record in enumerate(records):
        try:
            cells.append(selector(record))
        except Exception as exc:
            raise SelectionError(f"Record {index}: {exc}") from exc
    return cells


def read_records(text: str, input_format: InputFormat = "lines") -> list[Any]:
    """Decode raw input into records."""

    if input_format == "lines":
        return [line for line in text.splitlines() if line.strip()]

    if input_format == "json":
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SelectionError(f"Invalid JSON input: {exc}") from exc
        if isinstance(payload, list):
            return cast("list[Any]", payload)
        return [payload]

    if input_format == "jsonl":
        records: list[Any] = []
        for number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise SelectionError(f"Invalid JSON on line {number}: {exc}") from exc
        return records

    raise SelectionError(f"Unsupported input format {input_format!r}.")
