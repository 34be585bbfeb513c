"""Plain-JSON conversion for operation results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, cast


def to_jsonable(value: Any) -> Any:
    """Flatten result dataclasses, enums, and tuples into JSON-ready values."""

    if is_dataclass(value) and not isinstance(value, type):
        value = asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        mapping = cast("Mapping[object, object]", value)
        return {str(key): to_jsonable(item) for key, item in mapping.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in cast("tuple[object, ...]", value)]
    return value
