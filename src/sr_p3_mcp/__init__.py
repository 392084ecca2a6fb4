"""SR P3 MCP Server - Model Context Protocol access to Sveriges Radio P3 playlists.

This package provides a Model Context Protocol (MCP) server that lets LLM
applications like Claude Desktop look up what is playing on Sveriges Radio P3
right now, and what was played on a given day within the last 90 days.

Components:
    - server.py: Main MCP server class with stdio transport
    - tools.py: 2 MCP tools (current playlist, search by date)
    - playlists.py: Query orchestration and failure boundary
    - client.py: Rate-limited HTTP client for the SR Open API (XML)
    - normalize.py: XML record normalization into Song models
    - dates.py: Date and date-range resolution with validation
    - rate_limiter.py: Sliding-window client-side rate limiter
    - utils.py: Tool error handling and result formatting
"""

__version__ = "1.0.0"
