"""CLI output formatting utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, Protocol, cast, runtime_checkable

from colgrid.lib.serialization import to_jsonable

OutputFormat = Literal["text", "json"]


@runtime_checkable
class TextFormattable(Protocol):
    """Operation outputs that render themselves for text mode."""

    def format_text(self) -> str: ...


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat


def normalize_output_format(*, requested: str | None, json_mode: bool) -> OutputFormat:
    """Resolve final output format from flags; text unless asked otherwise."""

    if json_mode:
        return "json"
    if requested is None or requested == "":
        return "text"

    normalized = requested.strip().lower()
    if normalized in {"text", "json"}:
        return cast("OutputFormat", normalized)
    raise SystemExit("--format must be one of: text, json")


def emit(value: Any, config: OutputConfig) -> None:
    """Emit one payload according to the configured output mode."""

    if config.format == "json":
        print(json.dumps(to_jsonable(value), sort_keys=True))
        return
    if isinstance(value, TextFormattable):
        text = value.format_text()
        if text:
            print(text)
    else:
        print(json.dumps(to_jsonable(value), sort_keys=True, indent=2))
