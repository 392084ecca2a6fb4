"""Test suite for SR P3 MCP Server.

This test package validates the MCP server implementation:
    - Rate limiter tests: sliding-window admission and wait time
    - Date tests: date and range resolution with recency/order rules
    - Normalization tests: scalar-or-list XML nodes into Song records
    - Client tests: HTTP error mapping via httpx.MockTransport
    - Playlist tests: orchestration, filtering, limits and failure isolation
    - Tool and integration tests: argument validation and JSON results

All tests use mocked clients or transports; no real network access.
"""
