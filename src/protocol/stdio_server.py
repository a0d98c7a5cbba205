"""STDIO transport MCP server."""

import asyncio
import logging
import signal
from typing import Optional
from mcp.server.stdio import stdio_server
from core.config import AppConfig
from protocol.base_server import BaseMCPServer
from protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    async def run(self):
        """Run the STDIO MCP server."""
        logger.info("Starting STDIO MCP server")
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Server running and connected")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


def _cancel_on_sigterm(task: asyncio.Task):
    """Turn SIGTERM into task cancellation so cleanup runs like on SIGINT."""
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, task.cancel)
    except (NotImplementedError, RuntimeError):
        # add_signal_handler is unavailable on Windows event loops
        logger.debug("SIGTERM handler not installed")


async def run_stdio_server(app_config: Optional[AppConfig] = None):
    """Run STDIO MCP server with given configuration.

    Args:
        app_config: App configuration (optional, defaults to env)
    """
    app_config = app_config or AppConfig.from_env()
    dispatcher = Dispatcher.from_config(app_config)
    server = StdioMCPServer(dispatcher, app_config.server_name, app_config.server_version)

    current = asyncio.current_task()
    if current is not None:
        _cancel_on_sigterm(current)

    try:
        await server.run()
    finally:
        logger.info("Shutting down...")
        await dispatcher.close()
