"""Base classes for MCP tool handlers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from database.serialization import to_json_text


@dataclass(frozen=True)
class OperationContext:
    """Resolved database context for one tool call."""

    client: Any
    database: Any
    database_name: str

    def collection(self, name: str) -> Any:
        return self.database[name]


Operation = Callable[[Dict[str, Any], OperationContext], Awaitable[str]]


class ToolHandler(ABC):
    """Abstract base class for MCP tool handlers.

    A handler groups related tools. Each tool maps to one operation that
    receives already-normalized arguments, performs exactly one driver call
    and returns the text placed in the response envelope.
    """

    def __init__(self):
        self._operations = self.operations()

    @abstractmethod
    def operations(self) -> Dict[str, Operation]:
        """Return mapping of tool name to the coroutine that executes it."""
        pass

    @property
    def tool_names(self) -> List[str]:
        """Return list of tool names this handler supports."""
        return list(self._operations)

    async def execute(self, tool_name: str, arguments: Dict[str, Any], context: OperationContext) -> str:
        """
        Execute one tool.

        Args:
            tool_name: Registered tool name
            arguments: Normalized arguments
            context: Database context for the call

        Returns:
            Response text

        Raises:
            KeyError: If this handler does not own tool_name
            Exception: Driver failures propagate unchanged
        """
        operation = self._operations[tool_name]
        return await operation(arguments, context)

    @staticmethod
    def _format_documents(documents: Any) -> str:
        """Serialize documents as indented Extended JSON."""
        return to_json_text(documents)
