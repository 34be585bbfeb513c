"""Input helpers that turn untyped tool arguments into operation payloads."""

from __future__ import annotations

import inspect
import types
from collections.abc import Mapping
from dataclasses import MISSING, fields, is_dataclass
from typing import Any, TypeVar, Union, cast, get_args, get_origin, get_type_hints

from colgrid.lib.errors import ConfigurationError

PayloadT = TypeVar("PayloadT")


def normalize_optional(annotation: Any) -> tuple[Any, bool]:
    """Return the wrapped type + whether the annotation is Optional[T]."""

    origin = get_origin(annotation)
    if origin is None:
        return annotation, False
    args = get_args(annotation)
    if origin is types.UnionType or origin is Union:
        non_none_args = [arg for arg in args if arg is not type(None)]
        if len(non_none_args) == 1 and len(non_none_args) != len(args):
            return non_none_args[0], True
    return annotation, False


def coerce_scalar(annotation: Any, value: object, *, field_name: str) -> object:
    """Coerce one tool argument to the scalar type its field declares."""

    normalized, _ = normalize_optional(annotation)
    if value is None:
        return None
    try:
        if normalized is str:
            return str(value)
        if normalized is int:
            if isinstance(value, bool):
                raise ValueError("booleans are not integers")
            return int(cast("Any", value))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value for '{field_name}': {exc}") from exc
    if normalized is bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    return value


def coerce_input_payload(payload_type: type[PayloadT], raw_input: object) -> PayloadT:
    """Coerce untyped input dictionaries into typed dataclass payloads."""

    if not is_dataclass(payload_type):
        return payload_type()

    if raw_input is None:
        data: dict[str, object] = {}
    elif isinstance(raw_input, Mapping):
        data = {
            str(key): item for key, item in cast("Mapping[object, object]", raw_input).items()
        }
    else:
        raise TypeError(f"Tool input must be an object, got {type(raw_input).__name__}")

    hints = get_type_hints(payload_type)
    kwargs: dict[str, object] = {}
    for field in fields(payload_type):
        annotation = hints.get(field.name, field.type)
        if field.name in data:
            value = data[field.name]
            origin = get_origin(annotation)
            args = get_args(annotation)
            if origin in {list, tuple} and args and isinstance(value, (list, tuple)):
                items = [
                    coerce_scalar(args[0], item, field_name=field.name)
                    for item in cast("list[object]", value)
                ]
                kwargs[field.name] = tuple(items) if origin is tuple else items
            else:
                kwargs[field.name] = coerce_scalar(annotation, value, field_name=field.name)
            continue

        if field.default is not MISSING:
            kwargs[field.name] = field.default
            continue
        if field.default_factory is not MISSING:
            kwargs[field.name] = field.default_factory()
            continue
        raise TypeError(f"Missing required field '{field.name}'")

    return cast("PayloadT", payload_type(**kwargs))


def signature_from_dataclass(payload_type: type[object]) -> inspect.Signature:
    """Build a callable signature matching dataclass fields for FastMCP schemas."""

    if not is_dataclass(payload_type):
        return inspect.Signature(parameters=[])

    resolved_hints = get_type_hints(payload_type, include_extras=True)
    parameters: list[inspect.Parameter] = []
    for field in fields(payload_type):
        default: object = inspect.Parameter.empty
        if field.default is not MISSING:
            default = field.default
        elif field.default_factory is not MISSING:
            default = field.default_factory()

        parameters.append(
            inspect.Parameter(
                name=field.name,
                kind=inspect.Parameter.KEYWORD_ONLY,
                default=default,
                annotation=resolved_hints.get(field.name, field.type),
            )
        )

    return inspect.Signature(parameters=parameters)
