"""Core modules for MCP MongoDB Server."""

from .exceptions import (
    MCPMongoError,
    ToolNotFoundError,
    ToolArgumentError,
    DatabaseConnectionError,
    ConfigurationError
)

__all__ = [
    "MCPMongoError",
    "ToolNotFoundError",
    "ToolArgumentError",
    "DatabaseConnectionError",
    "ConfigurationError"
]
