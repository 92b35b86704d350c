"""
tasknote MCP Server - task-note operations for MCP clients.

Exposes create / get / page / update / delete as MCP tools over stdio.

- Inputs are validated per tool before touching the store
- Errors are mapped to short messages; details only go to the log

Usage:
    tasknote mcp  # Start MCP server (stdio transport)
"""

import asyncio
import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from tasknote.mcp.handlers import HANDLERS, VALIDATORS
from tasknote.mcp.tool_definitions import TOOLS
from tasknote.protocols import IdentifierExhaustedError, StorageError
from tasknote.service import get_service

logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = Server("tasknote")


# =============================================================================
# INPUT VALIDATION & ERROR MAPPING
# =============================================================================


def validate_tool_input(name: str, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Validate MCP tool inputs."""
    try:
        if not isinstance(name, str) or not name:
            raise ValueError("tool name must be a non-empty string")
        if not isinstance(arguments, dict):
            raise ValueError(f"arguments must be an object, got {type(arguments).__name__}")

        validator = VALIDATORS.get(name)
        if validator is None:
            raise ValueError(f"Unknown tool: {name}")
        return validator(arguments)

    except (ValueError, TypeError) as e:
        logger.warning(f"Input validation failed for tool {name}: {e}")
        raise ValueError(f"Invalid input: {str(e)}")


def handle_tool_error(e: Exception, tool_name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Map an exception to a client-safe message."""
    if isinstance(e, ValueError):
        logger.warning(f"Invalid input for tool {tool_name}: {e}")
        return [TextContent(type="text", text=str(e))]

    elif isinstance(e, IdentifierExhaustedError):
        logger.error(f"Id allocation failed for tool {tool_name}: {e}")
        return [TextContent(type="text", text="Could not allocate a task id")]

    elif isinstance(e, StorageError):
        logger.error(f"Storage error for tool {tool_name}: {e}")
        return [TextContent(type="text", text="Service temporarily unavailable")]

    else:
        argument_keys = list(arguments.keys()) if isinstance(arguments, dict) else []
        logger.error(
            f"Internal error in tool {tool_name}",
            extra={
                "tool_name": tool_name,
                "arguments_keys": argument_keys,
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        return [TextContent(type="text", text="Internal server error")]


# =============================================================================
# MCP PROTOCOL HANDLERS
# =============================================================================


@mcp.list_tools()
async def list_tools() -> list[Tool]:
    """List available todo tools."""
    return list(TOOLS)


@mcp.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Validate, dispatch and wrap a tool call."""
    try:
        sanitized_args = validate_tool_input(name, arguments)
        result = HANDLERS[name](sanitized_args, get_service())
        return [TextContent(type="text", text=result)]
    except Exception as e:
        return handle_tool_error(e, name, arguments)


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await mcp.run(
            read_stream,
            write_stream,
            mcp.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    service = get_service()
    logger.info(f"Starting MCP server on {service.store.db_path}")
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
