"""MCP tool definitions for MongoDB operations."""

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from mcp.types import Tool


ParamType = Literal["string", "integer", "number", "boolean", "object", "array"]


class ParamSpec(BaseModel):
    """Declared type, default and bounds of one tool parameter."""

    model_config = ConfigDict(frozen=True)

    type: ParamType
    description: str = ""
    required: bool = False
    default: Any = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    items: Optional[ParamType] = Field(default=None, description="Element type for array parameters")

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type, "description": self.description}
        if self.items:
            schema["items"] = {"type": self.items}
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        return schema


class ToolDefinition(BaseModel):
    """Name, description and parameter schema of one tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, ParamSpec] = Field(default_factory=dict)

    @property
    def required_parameters(self) -> List[str]:
        return [name for name, spec in self.parameters.items() if spec.required]

    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema advertised to MCP clients."""
        return {
            "type": "object",
            "properties": {name: spec.json_schema() for name, spec in self.parameters.items()},
            "required": self.required_parameters
        }

    def to_mcp_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema()
        }


# Tool name constants (used by handlers to bind their operations)
TOOL_AGGREGATE = "aggregate"
TOOL_SAMPLE = "sample"
TOOL_EXPLAIN = "explain"
TOOL_FIND = "find"
TOOL_FIND_ONE = "findOne"
TOOL_COUNT = "count"
TOOL_LIST_COLLECTIONS = "listCollections"
TOOL_DISTINCT = "distinct"
TOOL_LIST_DATABASES = "listDatabases"
TOOL_INSERT_ONE = "insertOne"
TOOL_INSERT_MANY = "insertMany"
TOOL_UPDATE_ONE = "updateOne"
TOOL_UPDATE_MANY = "updateMany"
TOOL_DELETE_ONE = "deleteOne"
TOOL_DELETE_MANY = "deleteMany"
TOOL_DROP_COLLECTION = "dropCollection"

SAMPLE_DEFAULT_SIZE = 5
SAMPLE_MAX_SIZE = 10
FIND_DEFAULT_LIMIT = 10
FIND_MAX_LIMIT = 100


def _collection(description: str) -> ParamSpec:
    return ParamSpec(type="string", description=description, required=True)


def _database() -> ParamSpec:
    return ParamSpec(type="string", description="Database name (defaults to the server's default database)")


def _filter(required: bool = False, description: str = "MongoDB query filter") -> ParamSpec:
    if required:
        return ParamSpec(type="object", description=description, required=True)
    return ParamSpec(type="object", description=description, default={})


def _pipeline(description: str) -> ParamSpec:
    return ParamSpec(type="array", items="object", description=description, required=True)


def get_all_tools() -> List[ToolDefinition]:
    """Build every tool definition in catalog order."""
    return [
        ToolDefinition(
            name=TOOL_AGGREGATE,
            description="Run a MongoDB aggregation pipeline",
            parameters={
                "collection": _collection("Name of the collection to query"),
                "pipeline": _pipeline("MongoDB aggregation pipeline stages"),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_SAMPLE,
            description="Get random sample documents from a collection",
            parameters={
                "collection": _collection("Name of the collection to sample from"),
                "count": ParamSpec(
                    type="integer",
                    description=f"Number of documents to sample (default: {SAMPLE_DEFAULT_SIZE}, max: {SAMPLE_MAX_SIZE})",
                    default=SAMPLE_DEFAULT_SIZE,
                    minimum=1,
                    maximum=SAMPLE_MAX_SIZE
                ),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_EXPLAIN,
            description="Get the execution plan for an aggregation pipeline",
            parameters={
                "collection": _collection("Name of the collection to analyze"),
                "pipeline": _pipeline("MongoDB aggregation pipeline stages to analyze"),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_FIND,
            description="Find documents in a collection with optional filter, projection, sort and limit",
            parameters={
                "collection": _collection("Name of the collection to query"),
                "filter": _filter(),
                "projection": ParamSpec(type="object", description="Fields to include or exclude", default={}),
                "limit": ParamSpec(
                    type="integer",
                    description=f"Maximum number of documents to return (default: {FIND_DEFAULT_LIMIT}, max: {FIND_MAX_LIMIT})",
                    default=FIND_DEFAULT_LIMIT,
                    minimum=1,
                    maximum=FIND_MAX_LIMIT
                ),
                "sort": ParamSpec(type="object", description="Sort specification, e.g. {\"createdAt\": -1}", default={}),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_FIND_ONE,
            description="Find a single document matching a filter",
            parameters={
                "collection": _collection("Name of the collection to query"),
                "filter": _filter(required=True),
                "projection": ParamSpec(type="object", description="Fields to include or exclude", default={}),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_COUNT,
            description="Count documents matching a filter",
            parameters={
                "collection": _collection("Name of the collection to count"),
                "filter": _filter(),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_LIST_COLLECTIONS,
            description="List collections in a database",
            parameters={
                "nameOnly": ParamSpec(type="boolean", description="Return collection names only", default=False),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_DISTINCT,
            description="Get the distinct values of a field",
            parameters={
                "collection": _collection("Name of the collection to query"),
                "field": ParamSpec(type="string", description="Field to collect distinct values for", required=True),
                "filter": _filter(),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_LIST_DATABASES,
            description="List all databases on the server",
            parameters={
                "nameOnly": ParamSpec(type="boolean", description="Return database names only", default=True),
            }
        ),
        ToolDefinition(
            name=TOOL_INSERT_ONE,
            description="Insert a single document into a collection",
            parameters={
                "collection": _collection("Name of the collection to insert into"),
                "document": ParamSpec(type="object", description="Document to insert", required=True),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_INSERT_MANY,
            description="Insert multiple documents into a collection",
            parameters={
                "collection": _collection("Name of the collection to insert into"),
                "documents": ParamSpec(type="array", items="object", description="Documents to insert", required=True),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_UPDATE_ONE,
            description="Update a single document matching a filter",
            parameters={
                "collection": _collection("Name of the collection to update"),
                "filter": _filter(required=True, description="Filter selecting the document to update"),
                "update": ParamSpec(type="object", description="Update operations, e.g. {\"$set\": {...}}", required=True),
                "upsert": ParamSpec(type="boolean", description="Insert a document if none matches", default=False),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_UPDATE_MANY,
            description="Update all documents matching a filter",
            parameters={
                "collection": _collection("Name of the collection to update"),
                "filter": _filter(required=True, description="Filter selecting the documents to update"),
                "update": ParamSpec(type="object", description="Update operations, e.g. {\"$set\": {...}}", required=True),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_DELETE_ONE,
            description="Delete a single document matching a filter",
            parameters={
                "collection": _collection("Name of the collection to delete from"),
                "filter": _filter(required=True, description="Filter selecting the document to delete"),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_DELETE_MANY,
            description="Delete all documents matching a filter",
            parameters={
                "collection": _collection("Name of the collection to delete from"),
                "filter": _filter(required=True, description="Filter selecting the documents to delete"),
                "database": _database(),
            }
        ),
        ToolDefinition(
            name=TOOL_DROP_COLLECTION,
            description=(
                "Drop a collection and all of its documents. "
                "DESTRUCTIVE: requires confirm=true, otherwise nothing is dropped."
            ),
            parameters={
                "collection": _collection("Name of the collection to drop"),
                # Advertised as required; omitting it falls back to the refusal path.
                "confirm": ParamSpec(
                    type="boolean",
                    description="Must be true to confirm the drop",
                    required=True,
                    default=False
                ),
                "database": _database(),
            }
        ),
    ]
