"""Main MCP Server class with stdio transport for Claude Desktop integration.

This module implements the MCPServer class that wires the SR API client,
rate limiter and playlist service into the MCP tools and serves them over
stdio. Diagnostics go to stderr; stdout carries only protocol frames.
"""

import asyncio
import logging
from typing import Any, Optional

import mcp.server.stdio
import mcp.types as types
from mcp.server import Server

from . import __version__
from .client import SRApiClient
from .config import SRConfig
from .logger import setup_logging
from .playlists import PlaylistService
from .rate_limiter import RateLimiter
from .tools import ToolRegistry
from .utils import ToolExecutionError, safe_tool_execution

logger = logging.getLogger(__name__)

SERVER_NAME = "sr-p3-mcp-server"


class MCPServer:
    """Main MCP server class coordinating the SR P3 tools.

    This class:
    - Builds one RateLimiter and SRApiClient for the process lifetime
    - Registers 2 tools
    - Provides stdio transport for Claude Desktop
    """

    def __init__(self, config: Optional[SRConfig] = None):
        """Initialize MCP server.

        Args:
            config: Optional SRConfig (default: read from environment)
        """
        self.config = config or SRConfig.from_environment()

        self.rate_limiter = RateLimiter()
        self.sr_client = SRApiClient(self.config, self.rate_limiter)
        self.service = PlaylistService(self.sr_client)
        self.tool_registry = ToolRegistry(self.service)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        self._register_handlers()

        logger.info("SR P3 MCP Server initialized")

    def _register_handlers(self):
        """Register all MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """Return all available tools."""
            tools = self.tool_registry.get_all()
            logger.info(f"Listing {len(tools)} tools")
            return tools

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
            """Execute a tool by name."""
            return await self._call_tool(name, arguments)

    async def _call_tool(self, name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Run a tool and return its content.

        Raises:
            ValueError: If the tool name is unknown
            ToolExecutionError: If the tool failed; the MCP server reports it with isError
        """
        logger.info(f"Executing tool: {name} with args: {arguments}")

        handler = self.tool_registry.get_handler(name)
        result = await safe_tool_execution(name, handler, arguments)

        if result.isError:
            raise ToolExecutionError(result.content[0].text)
        return result.content

    async def run(self):
        """Run the MCP server with stdio transport."""
        tool_names = ", ".join(tool.name for tool in self.tool_registry.get_all())
        logger.info("SR P3 MCP Server running on stdio")
        logger.info(f"Server name: {SERVER_NAME}")
        logger.info(f"Version: {__version__}")
        logger.info(f"Available tools: {tool_names}")

        try:
            async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.sr_client.aclose()


async def main():
    """Main entry point for the MCP server."""
    config = SRConfig.from_environment()
    setup_logging(config)

    server = MCPServer(config)
    await server.run()


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
