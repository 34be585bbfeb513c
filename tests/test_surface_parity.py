"""Surface parity checks between registry, CLI, and MCP server."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from colgrid.cli.main import get_registered_cli_commands, get_registered_cli_descriptions
from colgrid.lib.ops.registry import OperationSpec, get_all_operations, operation
from colgrid.server.main import get_registered_mcp_tools


@dataclass(frozen=True, slots=True)
class _DupInput:
    pass


@dataclass(frozen=True, slots=True)
class _DupOutput:
    ok: bool


async def _dup_async(_: _DupInput) -> _DupOutput:
    return _DupOutput(ok=True)


def _dup_sync(_: _DupInput) -> _DupOutput:
    return _DupOutput(ok=True)


def test_registry_bootstraps_layout_operations() -> None:
    operations = get_all_operations()

    assert [op.name for op in operations] == ["layout.plan", "layout.wide"]
    assert [op.mcp_name for op in operations] == ["layout_plan", "layout_wide"]


def test_every_operation_has_both_surfaces() -> None:
    cli_commands = get_registered_cli_commands()
    mcp_tools = get_registered_mcp_tools()

    for op in get_all_operations():
        if not op.cli_only:
            assert op.name in mcp_tools
        if not op.mcp_only:
            assert op.cli_path in cli_commands


def test_cli_help_matches_mcp_description() -> None:
    cli_descriptions = get_registered_cli_descriptions()
    mcp_descriptions = get_registered_mcp_tools()

    for op in get_all_operations():
        assert cli_descriptions[op.name] == mcp_descriptions[op.name]


def test_duplicate_operation_name_guard() -> None:
    with pytest.raises(ValueError, match="Duplicate operation name"):
        operation(
            OperationSpec[_DupInput, _DupOutput](
                name="layout.wide",
                handler=_dup_async,
                sync_handler=_dup_sync,
                input_type=_DupInput,
                output_type=_DupOutput,
                cli_group="layout",
                cli_name="wide",
                mcp_name="layout_wide",
                description="duplicate",
            )
        )


def test_cli_only_and_mcp_only_are_exclusive() -> None:
    with pytest.raises(ValueError, match="cannot be both"):
        operation(
            OperationSpec[_DupInput, _DupOutput](
                name="layout.nowhere",
                handler=_dup_async,
                sync_handler=_dup_sync,
                input_type=_DupInput,
                output_type=_DupOutput,
                cli_group="layout",
                cli_name="nowhere",
                mcp_name="layout_nowhere",
                description="unreachable",
                cli_only=True,
                mcp_only=True,
            )
        )
