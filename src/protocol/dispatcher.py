"""Transport-agnostic request dispatcher.

Routes ``(method, params)`` requests to the tool registry and shapes every
result into a response envelope. Nothing raised below this layer escapes it.
"""

import json
import logging
from typing import Any, Dict, Optional

from core.config import AppConfig, MongoConfig
from core.error_handling import ErrorCode, ToolOutcome, error_envelope
from core.exceptions import ToolNotFoundError
from database.connection import MongoConnection
from tools.base import OperationContext
from tools.registry import RegisteredTool, ToolRegistry
from tools.validators import ArgumentValidator

logger = logging.getLogger(__name__)

METHOD_LIST_TOOLS = "tools/list"
METHOD_CALL_TOOL = "tools/call"
METHOD_LIST_RESOURCES = "resources/list"


class Dispatcher:
    """Owns the tool registry and the shared MongoDB connection."""

    def __init__(
        self,
        connection: MongoConnection,
        registry: Optional[ToolRegistry] = None,
        default_database: Optional[str] = None,
        resource_collection: Optional[str] = None
    ):
        self.connection = connection
        self.registry = registry or ToolRegistry()
        self.default_database = default_database or connection.config.default_database
        self.resource_collection = resource_collection or connection.config.resource_collection

    @classmethod
    def from_config(cls, app_config: AppConfig) -> "Dispatcher":
        mongo: MongoConfig = app_config.mongo
        return cls(MongoConnection(mongo, app_config))

    async def handle(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Handle one protocol request.

        Args:
            method: Protocol method name
            params: Method parameters

        Returns:
            Result payload or error envelope
        """
        logger.info(f"Received request: {method}")
        params = params or {}

        if method == METHOD_LIST_TOOLS:
            return self.list_tools()
        if method == METHOD_CALL_TOOL:
            return await self.call_tool(params.get("name", ""), params.get("arguments"))
        if method == METHOD_LIST_RESOURCES:
            return self.list_resources()

        return error_envelope(ErrorCode.METHOD_NOT_FOUND, f"Method not found: {method}")

    def list_tools(self) -> Dict[str, Any]:
        return {"tools": [definition.to_dict() for definition in self.registry.list()]}

    def list_resources(self) -> Dict[str, Any]:
        """Static catalog of the one advertised collection; no database access."""
        db, collection = self.default_database, self.resource_collection
        return {
            "resources": [{
                "uri": f"mongodb://{db}/{collection}",
                "mimeType": "application/json",
                "name": f"{collection} Collection",
                "description": f"{collection} collection in {db} database"
            }]
        }

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Invoke a tool and return its envelope."""
        try:
            entry = self.registry.resolve(name)
        except ToolNotFoundError as e:
            logger.warning(e.message)
            return error_envelope(ErrorCode.METHOD_NOT_FOUND, e.message)

        logger.info(f"Executing tool: {name}")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Arguments: {json.dumps(arguments, indent=2, default=str)}")

        outcome = await self.invoke(entry, arguments)
        return outcome.to_envelope()

    async def invoke(self, entry: RegisteredTool, arguments: Optional[Dict[str, Any]]) -> ToolOutcome:
        """
        Run a resolved tool and capture the result.

        Validation happens before the connection is touched, so a bad call
        never reaches the handler nor opens a connection.
        """
        try:
            call_args = ArgumentValidator.normalize(entry.definition, arguments)
            client = await self.connection.get_client()
            database_name = call_args.pop("database", None) or self.default_database
            context = OperationContext(
                client=client,
                database=client[database_name],
                database_name=database_name
            )
            text = await entry.handler.execute(entry.name, call_args, context)
        except Exception as e:
            logger.error(f"Error executing tool {entry.name}: {e}")
            return ToolOutcome.failure(e)

        return ToolOutcome.success(text)

    async def close(self):
        await self.connection.close()
