"""Catalog and administrative handlers: listCollections, listDatabases, dropCollection."""

import logging
from typing import Any, Dict

from tools.base import ToolHandler, OperationContext, Operation
from tools.definitions import TOOL_LIST_COLLECTIONS, TOOL_LIST_DATABASES, TOOL_DROP_COLLECTION

logger = logging.getLogger(__name__)


def drop_refusal_message(collection: str) -> str:
    return (
        f"⚠️ Refusing to drop collection '{collection}': this permanently deletes all of its documents. "
        "Call dropCollection again with confirm=true to proceed."
    )


class AdminHandler(ToolHandler):
    """Handler for collection/database catalog operations."""

    def operations(self) -> Dict[str, Operation]:
        return {
            TOOL_LIST_COLLECTIONS: self._list_collections,
            TOOL_LIST_DATABASES: self._list_databases,
            TOOL_DROP_COLLECTION: self._drop_collection,
        }

    async def _list_collections(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        logger.info(f"Listing collections in {ctx.database_name} (nameOnly={args['nameOnly']})")
        if args["nameOnly"]:
            names = await ctx.database.list_collection_names()
            return self._format_documents(names)

        cursor = await ctx.database.list_collections()
        collections = await cursor.to_list()
        return self._format_documents(collections)

    async def _list_databases(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        """Server-wide listing; runs against the admin database."""
        logger.info(f"Listing databases (nameOnly={args['nameOnly']})")
        result = await ctx.client.admin.command({"listDatabases": 1, "nameOnly": args["nameOnly"]})
        return self._format_documents(result)

    async def _drop_collection(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]

        if args["confirm"] is not True:
            logger.warning(f"Refused unconfirmed drop of {ctx.database_name}.{collection}")
            return drop_refusal_message(collection)

        logger.warning(f"Dropping collection {ctx.database_name}.{collection}")
        result = await ctx.database.drop_collection(collection)

        if result.get("ok"):
            return f"✅ Collection '{collection}' dropped successfully from database '{ctx.database_name}'"

        reason = result.get("errmsg", "unknown reason")
        return f"❌ Collection '{collection}' was not dropped from database '{ctx.database_name}': {reason}"
