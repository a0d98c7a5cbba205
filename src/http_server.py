"""HTTP server for MCP MongoDB Server.

Provides REST API access and MCP SSE (Server-Sent Events) transport on one
FastAPI application.
"""

from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI

from api.middleware import setup_middleware
from api.routes import router as api_router, API_VERSION
from core.config import AppConfig
from core.dependencies import set_dispatcher
from protocol.dispatcher import Dispatcher
from protocol.sse_server import SseMCPServer

logger = logging.getLogger(__name__)


def create_http_app(app_config: AppConfig, dispatcher: Optional[Dispatcher] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_config: Application configuration
        dispatcher: Dispatcher to serve (default: built from app_config)

    Returns:
        FastAPI app with REST routes under /api/v1 and MCP SSE under /sse/
    """
    dispatcher = dispatcher or Dispatcher.from_config(app_config)
    set_dispatcher(dispatcher)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 HTTP server started")
        yield
        logger.info("🛑 Shutting down MCP MongoDB Server...")
        await dispatcher.close()
        logger.info("Graceful shutdown completed")

    app = FastAPI(
        title="MCP MongoDB API",
        version=API_VERSION,
        description="Model Context Protocol (MCP) MongoDB Server - Database Tools & REST API",
        lifespan=lifespan
    )

    setup_middleware(app, app_config)

    app.include_router(api_router)
    logger.info("REST API routes registered")

    mcp_sse_server = SseMCPServer(
        dispatcher,
        messages_path="/messages",
        server_name=app_config.server_name,
        version=app_config.server_version
    )
    app.mount("/sse", mcp_sse_server.create_asgi_app())
    logger.info("MCP SSE server mounted at /sse/")

    @app.get("/")
    async def root():
        return {
            "name": app_config.server_name,
            "version": app_config.server_version,
            "modes": ["REST API", "MCP SSE"],
            "endpoints": {
                "api": "/api/v1",
                "health": "/api/v1/health",
                "tools": "/api/v1/tools",
                "mcp_sse": "/sse/",
                "docs": "/docs"
            }
        }

    return app
