"""MCP Tools Registry - 2 tools for SR P3 playlist lookups.

This module implements the ToolRegistry class that exposes the current
playlist and the date search as MCP tools.
"""

from typing import Any

import mcp.types as types

from .playlists import PlaylistService
from .schemas import DEFAULT_LIMIT, MAX_LIMIT, GetCurrentPlaylistInput, SearchPlaylistInput


class ToolRegistry:
    """Registry for the SR P3 MCP tools.

    Provides 2 tools:
        1. get_current_playlist - Previous, current and next song on P3
        2. search_playlist_by_date - P3 playlist history for a date or date range
    """

    def __init__(self, service: PlaylistService):
        """Initialize tool registry.

        Args:
            service: PlaylistService executing the queries
        """
        self.service = service
        self.tools = self._define_tools()

    def _define_tools(self) -> dict[str, types.Tool]:
        """Define both tools.

        Returns:
            Dictionary mapping tool names to Tool definitions
        """
        return {
            "get_current_playlist": types.Tool(
                name="get_current_playlist",
                description=(
                    "Fetch the currently playing song on Sveriges Radio P3 (channel 565). "
                    "Returns the current song, previous song, and next song with details including "
                    "artist, title, album, start/stop timestamps in UTC."
                ),
                inputSchema={"type": "object", "properties": {}},
            ),
            "search_playlist_by_date": types.Tool(
                name="search_playlist_by_date",
                description=(
                    "Search Sveriges Radio P3 playlist history for a specific date or date range. "
                    "Returns an array of songs that played during the specified time period. "
                    "Dates must be within the last 90 days and cannot be in the future."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "date": {
                            "type": "string",
                            "description": (
                                'ISO 8601 date string (e.g., "2024-12-15") or date range '
                                '(e.g., "2024-12-01 to 2024-12-31")'
                            ),
                            "minLength": 1,
                        },
                        "artist_filter": {
                            "type": "string",
                            "description": "Optional: Filter results by artist name (case-insensitive substring match)",
                        },
                        "limit": {
                            "type": "integer",
                            "description": f"Optional: Maximum number of songs to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
                            "minimum": 1,
                            "maximum": MAX_LIMIT,
                            "default": DEFAULT_LIMIT,
                        },
                    },
                    "required": ["date"],
                },
            ),
        }

    def get_all(self) -> list[types.Tool]:
        """Get all tool definitions.

        Returns:
            List of both Tool objects
        """
        return list(self.tools.values())

    def get_handler(self, tool_name: str):
        """Look up the handler for a tool.

        Raises:
            ValueError: If tool_name is invalid
        """
        if tool_name not in self.tools:
            raise ValueError(f"Unknown tool: {tool_name}")
        return getattr(self, f"_{tool_name}")

    # Tool handler methods (private)

    async def _get_current_playlist(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Fetch the current P3 playlist."""
        GetCurrentPlaylistInput.model_validate(arguments or {})

        response = await self.service.get_current_playlist()

        return response.to_dict()

    async def _search_playlist_by_date(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Search P3 history by date."""
        query = SearchPlaylistInput.model_validate(arguments or {})

        response = await self.service.search_playlist_by_date(query)

        return response.to_dict()
