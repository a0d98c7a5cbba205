"""Read handlers: find, findOne, count, distinct."""

import logging
from typing import Any, Dict

from tools.base import ToolHandler, OperationContext, Operation
from tools.definitions import TOOL_FIND, TOOL_FIND_ONE, TOOL_COUNT, TOOL_DISTINCT

logger = logging.getLogger(__name__)

NO_DOCUMENT_FOUND = "No document found matching the criteria"


class QueryHandler(ToolHandler):
    """Handler for document reads."""

    def operations(self) -> Dict[str, Operation]:
        return {
            TOOL_FIND: self._find,
            TOOL_FIND_ONE: self._find_one,
            TOOL_COUNT: self._count,
            TOOL_DISTINCT: self._distinct,
        }

    async def _find(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        """
        Filtered, optionally sorted read capped at ``limit`` documents.

        An empty projection means "all fields"; the driver would otherwise
        read ``{}`` as "_id only".
        """
        collection = args["collection"]
        logger.info(f"Finding documents in {ctx.database_name}.{collection} (limit={args['limit']})")

        cursor = ctx.collection(collection).find(args["filter"], args["projection"] or None)
        if args["sort"]:
            cursor = cursor.sort(list(args["sort"].items()))
        cursor = cursor.limit(args["limit"])

        results = await cursor.to_list()
        return self._format_documents(results)

    async def _find_one(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        document = await ctx.collection(collection).find_one(args["filter"], args["projection"] or None)
        if document is None:
            return NO_DOCUMENT_FOUND
        return self._format_documents(document)

    async def _count(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        count = await ctx.collection(args["collection"]).count_documents(args["filter"])
        return self._format_documents({"count": count})

    async def _distinct(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        values = await ctx.collection(args["collection"]).distinct(args["field"], args["filter"])
        return self._format_documents(values)
