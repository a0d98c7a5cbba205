"""Write handlers: inserts, updates and deletes."""

import logging
from typing import Any, Dict

from tools.base import ToolHandler, OperationContext, Operation
from tools.definitions import (
    TOOL_INSERT_ONE, TOOL_INSERT_MANY, TOOL_UPDATE_ONE, TOOL_UPDATE_MANY,
    TOOL_DELETE_ONE, TOOL_DELETE_MANY
)

logger = logging.getLogger(__name__)


def _update_ack(result: Any) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": result.upserted_id,
        "upsertedCount": 1 if result.upserted_id is not None else 0
    }


def _delete_ack(result: Any) -> Dict[str, Any]:
    return {
        "acknowledged": result.acknowledged,
        "deletedCount": result.deleted_count
    }


class WriteHandler(ToolHandler):
    """Handler for document mutations. Each returns the driver acknowledgement."""

    def operations(self) -> Dict[str, Operation]:
        return {
            TOOL_INSERT_ONE: self._insert_one,
            TOOL_INSERT_MANY: self._insert_many,
            TOOL_UPDATE_ONE: self._update_one,
            TOOL_UPDATE_MANY: self._update_many,
            TOOL_DELETE_ONE: self._delete_one,
            TOOL_DELETE_MANY: self._delete_many,
        }

    async def _insert_one(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Inserting one document into {ctx.database_name}.{collection}")
        result = await ctx.collection(collection).insert_one(args["document"])
        return self._format_documents({
            "acknowledged": result.acknowledged,
            "insertedId": result.inserted_id
        })

    async def _insert_many(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Inserting {len(args['documents'])} documents into {ctx.database_name}.{collection}")
        result = await ctx.collection(collection).insert_many(args["documents"])
        return self._format_documents({
            "acknowledged": result.acknowledged,
            "insertedCount": len(result.inserted_ids),
            "insertedIds": result.inserted_ids
        })

    async def _update_one(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Updating one document in {ctx.database_name}.{collection} (upsert={args['upsert']})")
        result = await ctx.collection(collection).update_one(
            args["filter"], args["update"], upsert=args["upsert"]
        )
        return self._format_documents(_update_ack(result))

    async def _update_many(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Updating documents in {ctx.database_name}.{collection}")
        result = await ctx.collection(collection).update_many(args["filter"], args["update"])
        return self._format_documents(_update_ack(result))

    async def _delete_one(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Deleting one document from {ctx.database_name}.{collection}")
        result = await ctx.collection(collection).delete_one(args["filter"])
        return self._format_documents(_delete_ack(result))

    async def _delete_many(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        logger.info(f"Deleting documents from {ctx.database_name}.{collection}")
        result = await ctx.collection(collection).delete_many(args["filter"])
        return self._format_documents(_delete_ack(result))
