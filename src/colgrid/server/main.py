"""FastMCP stdio server exposing the layout operations as tools."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, cast

import structlog
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from colgrid.lib.errors import ColgridError
from colgrid.lib.logging import configure_logging
from colgrid.lib.ops.codec import coerce_input_payload, signature_from_dataclass
from colgrid.lib.ops.registry import OperationSpec, get_all_operations
from colgrid.lib.serialization import to_jsonable

logger = structlog.get_logger(__name__)

_TOOL_DESCRIPTIONS: dict[str, str] = {}


@asynccontextmanager
async def lifespan(_: FastMCP[Any]):
    # stdout carries the protocol; logs stay on stderr as JSON.
    configure_logging(json_mode=True)
    yield {}


mcp = FastMCP("colgrid", lifespan=lifespan)


def tool_error(exc: ColgridError) -> ToolError:
    """Report a layout failure with the same category and code the CLI exits with."""

    return ToolError(f"{exc.category} error (exit {exc.exit_code}): {exc}")


def _tool_handler(op: OperationSpec[Any, Any]) -> Any:
    async def _tool(**kwargs: object) -> object:
        try:
            payload = coerce_input_payload(op.input_type, kwargs)
            result = await op.handler(payload)
        except ColgridError as exc:
            logger.info("tool failed", tool=op.mcp_name, category=exc.category)
            raise tool_error(exc) from exc
        return to_jsonable(result)

    _tool.__name__ = op.mcp_name
    _tool.__doc__ = op.description
    cast("Any", _tool).__signature__ = signature_from_dataclass(op.input_type)
    return _tool


def _register_tools() -> None:
    for op in get_all_operations():
        if op.cli_only:
            continue
        mcp.tool(name=op.mcp_name, description=op.description)(_tool_handler(op))
        _TOOL_DESCRIPTIONS[op.name] = op.description


def get_registered_mcp_tools() -> dict[str, str]:
    """Map operation names to the descriptions their tools were registered with."""

    return dict(_TOOL_DESCRIPTIONS)


def run_server() -> None:
    mcp.run(transport="stdio")


_register_tools()
