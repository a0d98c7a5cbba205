"""MCP tools package for MongoDB operations."""

from tools.base import ToolHandler, OperationContext
from tools.registry import ToolRegistry, RegisteredTool
from tools.definitions import ToolDefinition, ParamSpec, get_all_tools
from tools.validators import ArgumentValidator, InputValidator

__all__ = [
    'ToolHandler',
    'OperationContext',
    'ToolRegistry',
    'RegisteredTool',
    'ToolDefinition',
    'ParamSpec',
    'get_all_tools',
    'ArgumentValidator',
    'InputValidator',
]
