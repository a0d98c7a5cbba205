"""SSE/HTTP transport MCP server.

Provides MCP server functionality over HTTP Server-Sent Events (SSE) transport.
"""

import logging
from mcp.server.sse import SseServerTransport
from protocol.base_server import BaseMCPServer
from protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class SseMCPServer(BaseMCPServer):
    """MCP server using HTTP/SSE transport."""

    def __init__(self, dispatcher: Dispatcher, messages_path: str = "/messages", **kwargs):
        """Initialize SSE MCP server.

        Args:
            dispatcher: Dispatcher owning the registry and connection
            messages_path: Path for SSE messages endpoint (relative to mount point)
        """
        super().__init__(dispatcher, **kwargs)
        self.sse_transport = SseServerTransport(messages_path)
        logger.info(f"SSE MCP server initialized with messages path: {messages_path}")

    async def handle_sse_connection(self, scope, receive, send):
        """Handle SSE connection.

        Args:
            scope: ASGI scope dict
            receive: ASGI receive callable
            send: ASGI send callable
        """
        logger.info("Handling SSE connection")
        async with self.sse_transport.connect_sse(scope, receive, send) as streams:
            await self.server.run(
                streams[0],
                streams[1],
                self.server.create_initialization_options()
            )

    async def handle_messages(self, scope, receive, send):
        """Handle MCP messages endpoint."""
        logger.debug("Handling MCP messages")
        await self.sse_transport.handle_post_message(scope, receive, send)

    def create_asgi_app(self):
        """Create ASGI application serving both the SSE stream and the messages endpoint.

        CORS is handled by the enclosing FastAPI application's middleware.
        """

        async def app(scope, receive, send):
            path = scope.get("path", "/")
            method = scope.get("method", "GET")

            logger.debug(f"SSE MCP app: method={method}, path={path}")

            # SSE connection endpoint (mounted at /sse/)
            if method == "GET" and path.endswith("/"):
                await self.handle_sse_connection(scope, receive, send)
            # Messages endpoint (/sse/messages)
            elif method == "POST" and "messages" in path:
                await self.handle_messages(scope, receive, send)
            else:
                logger.warning(f"Unknown path in SSE MCP app: {method} {path}")
                await send({
                    'type': 'http.response.start',
                    'status': 404,
                    'headers': [[b'content-type', b'text/plain']],
                })
                await send({
                    'type': 'http.response.body',
                    'body': b'Not Found',
                })

        return app
