"""Ensure all registered operation output types implement TextFormattable."""

from __future__ import annotations

import dataclasses
import types
from typing import Any, get_type_hints

from colgrid.cli.output import TextFormattable
from colgrid.lib.ops.registry import get_all_operations


def test_all_output_types_are_text_formattable() -> None:
    missing = [
        f"{spec.output_type.__name__} (from {spec.name})"
        for spec in get_all_operations()
        if not hasattr(spec.output_type, "format_text")
    ]
    assert not missing, "Output types without format_text():\n" + "\n".join(missing)


_DUMMY_VALUES: dict[type, Any] = {str: "", int: 0, bool: False}


def _resolve_dummy(annotation: Any) -> Any:
    if annotation in _DUMMY_VALUES:
        return _DUMMY_VALUES[annotation]
    origin = getattr(annotation, "__origin__", None)
    if isinstance(annotation, types.UnionType):
        return None
    if origin is tuple:
        return ()
    return ""


def _make_dummy(output_type: type[Any]) -> Any:
    kwargs: dict[str, Any] = {}
    hints = get_type_hints(output_type)
    for field in dataclasses.fields(output_type):
        if field.default is not dataclasses.MISSING:
            continue
        kwargs[field.name] = _resolve_dummy(hints.get(field.name))
    return output_type(**kwargs)


def test_format_text_returns_string_for_minimal_instances() -> None:
    for spec in get_all_operations():
        instance = _make_dummy(spec.output_type)
        assert isinstance(instance, TextFormattable)
        assert isinstance(instance.format_text(), str)
