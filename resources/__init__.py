"""MCP resources generated from the server's own tool definitions."""
