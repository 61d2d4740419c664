"""
Adapters — thin wrappers over the Google API clients.

One module per product. Each call goes through @with_retry so failures
surface as WorkspaceError. No MCP awareness, no result formatting.
"""
