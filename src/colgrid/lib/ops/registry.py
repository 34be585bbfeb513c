"""Operation registry read by both the CLI and the MCP server."""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

# Imported on first lookup; each module calls `operation(...)` at import time.
_OPERATION_MODULES = ("colgrid.lib.ops.layout",)


@dataclass(frozen=True, slots=True)
class OperationSpec(Generic[InputT, OutputT]):
    """One layout operation: its payload types, handlers, and surface names."""

    name: str
    handler: Callable[[InputT], Coroutine[Any, Any, OutputT]]
    sync_handler: Callable[..., OutputT]
    input_type: type[InputT]
    output_type: type[OutputT]
    cli_group: str
    cli_name: str
    mcp_name: str
    description: str
    cli_only: bool = False
    mcp_only: bool = False

    @property
    def cli_path(self) -> str:
        return f"{self.cli_group}.{self.cli_name}"


_REGISTRY: dict[str, OperationSpec[Any, Any]] = {}
_loaded = False


def operation(spec: OperationSpec[InputT, OutputT]) -> OperationSpec[InputT, OutputT]:
    if spec.cli_only and spec.mcp_only:
        raise ValueError(f"Operation '{spec.name}' cannot be both cli_only and mcp_only")
    if spec.name in _REGISTRY:
        raise ValueError(f"Duplicate operation name '{spec.name}'")
    _REGISTRY[spec.name] = spec
    return spec


def get_all_operations() -> list[OperationSpec[Any, Any]]:
    """Return every registered operation, sorted by name."""

    global _loaded
    if not _loaded:
        for module in _OPERATION_MODULES:
            importlib.import_module(module)
        _loaded = True
    return [_REGISTRY[name] for name in sorted(_REGISTRY)]
