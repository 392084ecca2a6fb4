"""Error handling utilities for the SR P3 MCP server.

Tool results and tool errors are both rendered as a single JSON TextContent,
so the response stream never carries a traceback. Failures are flagged with
``isError`` so MCP clients can tell them apart from results.
"""

import json
import logging
from typing import Any, Awaitable, Callable

import mcp.types as types
from pydantic import ValidationError

from .schemas import format_validation_error

logger = logging.getLogger(__name__)


class MCPError(Exception):
    """Base exception for MCP server errors."""

    pass


class ToolExecutionError(MCPError):
    """Tool call failed; the message is the JSON error payload for the client."""

    pass


def _json_result(payload: Any, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))],
        isError=is_error,
    )


async def safe_tool_execution(
    tool_name: str,
    handler: Callable[[dict[str, Any]], Awaitable[dict[str, Any]]],
    arguments: dict[str, Any],
) -> types.CallToolResult:
    """Execute tool with error handling.

    Args:
        tool_name: Name of the tool being executed
        handler: Async function to execute
        arguments: Tool arguments

    Returns:
        types.CallToolResult: Tool result, or {"error": ...} with isError set
    """
    try:
        result = await handler(arguments)
        return _json_result(result)

    except ValidationError as e:
        message = format_validation_error(e)
        logger.warning(f"Invalid arguments for {tool_name}: {message}")
        return _json_result({"error": message}, is_error=True)

    except Exception:
        logger.exception(f"Unexpected error in {tool_name}")
        return _json_result(
            {"error": "An unexpected error occurred. Please check the server logs for details."},
            is_error=True,
        )
