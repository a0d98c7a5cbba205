"""Aggregation pipeline handlers: aggregate, sample, explain."""

import logging
from typing import Any, Dict

from tools.base import ToolHandler, OperationContext, Operation
from tools.definitions import TOOL_AGGREGATE, TOOL_SAMPLE, TOOL_EXPLAIN

logger = logging.getLogger(__name__)

EXPLAIN_VERBOSITY = "queryPlanner"


class AggregationHandler(ToolHandler):
    """Handler for aggregation pipeline tools."""

    def operations(self) -> Dict[str, Operation]:
        return {
            TOOL_AGGREGATE: self._aggregate,
            TOOL_SAMPLE: self._sample,
            TOOL_EXPLAIN: self._explain,
        }

    async def _aggregate(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        pipeline = args["pipeline"]
        logger.info(f"Running aggregation on collection: {ctx.database_name}.{collection}")
        logger.debug(f"Pipeline: {pipeline}")

        cursor = await ctx.collection(collection).aggregate(pipeline)
        results = await cursor.to_list()
        logger.info(f"Results count: {len(results)}")
        return self._format_documents(results)

    async def _sample(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        collection = args["collection"]
        size = args["count"]
        logger.info(f"Sampling {size} documents from collection: {ctx.database_name}.{collection}")

        cursor = await ctx.collection(collection).aggregate([{"$sample": {"size": size}}])
        results = await cursor.to_list()
        return self._format_documents(results)

    async def _explain(self, args: Dict[str, Any], ctx: OperationContext) -> str:
        """Ask the query planner how it would run the pipeline."""
        collection = args["collection"]
        logger.info(f"Explaining query plan for collection: {ctx.database_name}.{collection}")

        # Command name must be the first key
        command = {
            "explain": {
                "aggregate": collection,
                "pipeline": args["pipeline"],
                "cursor": {}
            },
            "verbosity": EXPLAIN_VERBOSITY
        }
        plan = await ctx.database.command(command)
        return self._format_documents(plan)
