"""Base MCP server - binds the MCP protocol runtime to the Dispatcher.

Transport subclasses (STDIO, SSE) only decide how streams are obtained.
"""

import logging
from typing import List, Optional

from mcp import types
from mcp.server import Server
from mcp.shared.exceptions import McpError

from core.error_handling import is_error_envelope
from protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality.

    ``tools/call`` is installed as a raw request handler rather than through
    ``Server.call_tool()``: the SDK decorator validates arguments against the
    advertised JSON Schema and would reject out-of-range numbers that the
    dispatcher clamps.
    """

    def __init__(self, dispatcher: Dispatcher, server_name: Optional[str] = None, version: Optional[str] = None):
        """Initialize base MCP server.

        Args:
            dispatcher: Dispatcher owning the registry and connection
            server_name: Name of the MCP server
            version: Version reported during initialization
        """
        self.dispatcher = dispatcher
        server_name = server_name or "mongo-simple-server"
        self.server = Server(server_name, version=version)
        self._setup_handlers()
        logger.info(f"Initialized {server_name} MCP server")

    def _setup_handlers(self):
        """Setup MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[types.Tool]:
            """List all available tools."""
            return self.dispatcher.registry.mcp_tools()

        @self.server.list_resources()
        async def list_resources() -> List[types.Resource]:
            """List the advertised collection resource."""
            return [
                types.Resource(**resource)
                for resource in self.dispatcher.list_resources()["resources"]
            ]

        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    async def _handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        """Execute a tool; error envelopes travel back as JSON-RPC errors."""
        envelope = await self.dispatcher.call_tool(request.params.name, request.params.arguments or {})

        if is_error_envelope(envelope):
            error = envelope["error"]
            raise McpError(types.ErrorData(
                code=error["code"],
                message=error["message"],
                data=error.get("data")
            ))

        content = [
            types.TextContent(type="text", text=block["text"])
            for block in envelope["content"]
        ]
        return types.ServerResult(types.CallToolResult(content=content))
