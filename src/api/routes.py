"""FastAPI routes for the MCP MongoDB REST API."""

import logging
from datetime import datetime
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from api.middleware import limiter, _http_config
from core.dependencies import get_dispatcher_dependency
from core.error_handling import ErrorCode, is_error_envelope
from protocol.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


class ToolInvokeRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
    database_connected: bool
    server_info: Dict[str, Any] = Field(default_factory=dict)


class ToolInfo(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]


router = APIRouter(prefix="/api/v1")


@router.get("/health", response_model=HealthResponse)
async def health_check(dispatcher: Dispatcher = Depends(get_dispatcher_dependency)):
    """Health check endpoint."""
    result = await dispatcher.connection.test_connection()
    connected = bool(result.get("success"))
    return HealthResponse(
        status="ok" if connected else "degraded",
        timestamp=datetime.now().isoformat(),
        version=API_VERSION,
        database_connected=connected,
        server_info=result.get("server_info", {})
    )


@router.get("/tools", response_model=List[ToolInfo])
async def list_tools(dispatcher: Dispatcher = Depends(get_dispatcher_dependency)):
    """List all available MCP tools."""
    return [ToolInfo(**tool) for tool in dispatcher.list_tools()["tools"]]


@router.get("/resources")
async def list_resources(dispatcher: Dispatcher = Depends(get_dispatcher_dependency)):
    """List advertised resources."""
    return dispatcher.list_resources()


@router.post("/tools/{tool_name}")
@limiter.limit(_http_config.rate_limit_tools)
async def invoke_tool(
    request: Request,
    tool_name: str,
    body: ToolInvokeRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher_dependency)
):
    """Invoke a tool and return its envelope.

    Unknown tools answer 404, failed invocations 500; the body is the
    envelope either way.
    """
    envelope = await dispatcher.call_tool(tool_name, body.arguments)
    if not is_error_envelope(envelope):
        return envelope

    status_code = 404 if envelope["error"]["code"] == ErrorCode.METHOD_NOT_FOUND else 500
    return JSONResponse(status_code=status_code, content=envelope)
