"""Custom exceptions for MCP MongoDB Server."""


class MCPMongoError(Exception):
    """Base exception for all MCP MongoDB server errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ToolNotFoundError(MCPMongoError):
    """Exception raised when a tool name is not in the registry."""
    pass


class ToolArgumentError(MCPMongoError):
    """Exception raised when tool arguments fail schema validation."""
    pass


class DatabaseConnectionError(MCPMongoError):
    """Exception raised when the MongoDB connection cannot be established."""
    pass


class ConfigurationError(MCPMongoError):
    """Exception raised when configuration is invalid."""
    pass
