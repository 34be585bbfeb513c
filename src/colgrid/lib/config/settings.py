"""Project-level layout defaults loader."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import cast

from colgrid.lib.errors import ConfigurationError
from colgrid.lib.layout.config import FillOrder, parse_fill_order
from colgrid.lib.selection import DEFAULT_PROPERTIES

logger = logging.getLogger(__name__)

CONFIG_DIRNAME = ".colgrid"
CONFIG_FILENAME = "config.toml"


@dataclass(frozen=True, slots=True)
class ColgridConfig:
    """Resolved defaults for layout calls made through the CLI and MCP surfaces."""

    column_gap: int = 1
    order: FillOrder = FillOrder.COLUMN
    display_width: int | None = None
    default_properties: tuple[str, ...] = DEFAULT_PROPERTIES


_SECTION_KEY_MAP: dict[str, dict[str, str]] = {
    "layout": {
        "column_gap": "column_gap",
        "gap": "column_gap",
        "order": "order",
        "display_width": "display_width",
        "width": "display_width",
    },
    "selection": {
        "default_properties": "default_properties",
        "properties": "default_properties",
    },
}

_ENV_OVERRIDE_MAP: dict[str, str] = {
    "COLGRID_COLUMN_GAP": "column_gap",
    "COLGRID_ORDER": "order",
    "COLGRID_WIDTH": "display_width",
}


def _coerce_int(*, raw_value: object, source: str, minimum: int) -> int:
    if isinstance(raw_value, bool) or not isinstance(raw_value, int):
        raise ConfigurationError(
            f"Invalid value for '{source}': expected int, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    if raw_value < minimum:
        raise ConfigurationError(
            f"Invalid value for '{source}': expected int >= {minimum}, got {raw_value!r}."
        )
    return raw_value


def _coerce_properties(*, raw_value: object, source: str) -> tuple[str, ...]:
    if not isinstance(raw_value, list):
        raise ConfigurationError(
            f"Invalid value for '{source}': expected array[str], got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    parsed: list[str] = []
    for item in cast("list[object]", raw_value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigurationError(
                f"Invalid value for '{source}': expected non-empty strings, got {item!r}."
            )
        parsed.append(item.strip())
    return tuple(parsed)


def _coerce_file_value(*, field_name: str, raw_value: object, source: str) -> object:
    if field_name == "column_gap":
        return _coerce_int(raw_value=raw_value, source=source, minimum=0)
    if field_name == "display_width":
        return _coerce_int(raw_value=raw_value, source=source, minimum=1)
    if field_name == "default_properties":
        return _coerce_properties(raw_value=raw_value, source=source)
    if not isinstance(raw_value, str):
        raise ConfigurationError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    return parse_fill_order(raw_value)


def _coerce_env_value(*, field_name: str, raw_value: str, env_name: str) -> object:
    if field_name == "order":
        return parse_fill_order(raw_value)
    try:
        parsed = int(raw_value.strip())
    except ValueError as error:
        raise ConfigurationError(
            f"Invalid environment override '{env_name}': expected int, got {raw_value!r}."
        ) from error
    minimum = 0 if field_name == "column_gap" else 1
    return _coerce_int(raw_value=parsed, source=env_name, minimum=minimum)


def _default_values() -> dict[str, object]:
    defaults = ColgridConfig()
    return {field.name: getattr(defaults, field.name) for field in fields(ColgridConfig)}


def _apply_toml_payload(
    *,
    values: dict[str, object],
    payload: dict[str, object],
    path: Path,
) -> None:
    for key, raw_value in payload.items():
        section_map = _SECTION_KEY_MAP.get(key)
        if section_map is None:
            logger.warning("Ignoring unknown colgrid config key '%s'.", key)
            continue
        if not isinstance(raw_value, dict):
            raise ConfigurationError(f"Invalid value for '{key}' in '{path}': expected table.")
        for section_key, section_value in cast("dict[str, object]", raw_value).items():
            field_name = section_map.get(section_key)
            if field_name is None:
                logger.warning("Ignoring unknown colgrid config key '%s.%s'.", key, section_key)
                continue
            values[field_name] = _coerce_file_value(
                field_name=field_name,
                raw_value=section_value,
                source=f"{key}.{section_key}",
            )


def _apply_env_overrides(values: dict[str, object]) -> None:
    for env_name, field_name in _ENV_OVERRIDE_MAP.items():
        raw_value = os.getenv(env_name)
        if raw_value is None or not raw_value.strip():
            continue
        values[field_name] = _coerce_env_value(
            field_name=field_name,
            raw_value=raw_value,
            env_name=env_name,
        )


def config_path(root: Path) -> Path:
    return root / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config(root: Path | None = None) -> ColgridConfig:
    """Load `.colgrid/config.toml` under ``root`` and apply environment overrides."""

    values = _default_values()
    path = config_path(Path.cwd() if root is None else root)
    if path.is_file():
        try:
            payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as error:
            raise ConfigurationError(f"Invalid TOML in '{path}': {error}") from error
        payload = cast("dict[str, object]", payload_obj)
        _apply_toml_payload(values=values, payload=payload, path=path)

    _apply_env_overrides(values)
    return ColgridConfig(
        column_gap=cast("int", values["column_gap"]),
        order=cast("FillOrder", values["order"]),
        display_width=cast("int | None", values["display_width"]),
        default_properties=cast("tuple[str, ...]", values["default_properties"]),
    )
