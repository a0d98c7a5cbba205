"""MCP protocol wiring for MCP MongoDB Server."""
