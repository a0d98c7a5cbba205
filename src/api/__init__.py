"""REST API for MCP MongoDB Server."""
