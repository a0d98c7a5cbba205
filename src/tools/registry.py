"""Tool registry: one entry per tool pairing its definition with its handler."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from mcp.types import Tool

from core.exceptions import ToolNotFoundError
from tools.base import ToolHandler
from tools.definitions import ToolDefinition, get_all_tools
from tools.handlers import (
    AggregationHandler,
    QueryHandler,
    WriteHandler,
    AdminHandler,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.definition.name


class ToolRegistry:
    """
    Central registry for MCP tools.

    The catalog order of the definitions is preserved; each definition must
    have exactly one handler and every handler tool must have a definition.
    """

    def __init__(
        self,
        definitions: Optional[Sequence[ToolDefinition]] = None,
        handlers: Optional[Sequence[ToolHandler]] = None
    ):
        self._definitions: List[ToolDefinition] = list(definitions if definitions is not None else get_all_tools())
        self._entries: Dict[str, RegisteredTool] = {}
        self._register_handlers(handlers if handlers is not None else self._default_handlers())

    @staticmethod
    def _default_handlers() -> List[ToolHandler]:
        return [
            AggregationHandler(),
            QueryHandler(),
            WriteHandler(),
            AdminHandler(),
        ]

    def _register_handlers(self, handlers: Sequence[ToolHandler]):
        """Bind each definition to the handler that owns its tool name."""
        owners: Dict[str, ToolHandler] = {}
        for handler in handlers:
            for tool_name in handler.tool_names:
                if tool_name in owners:
                    raise ValueError(f"Tool {tool_name} is claimed by more than one handler")
                owners[tool_name] = handler

        for definition in self._definitions:
            if definition.name in self._entries:
                raise ValueError(f"Duplicate tool definition: {definition.name}")
            handler = owners.pop(definition.name, None)
            if handler is None:
                raise ValueError(f"No handler registered for tool {definition.name}")
            self._entries[definition.name] = RegisteredTool(definition, handler)
            logger.debug(f"Registered {definition.name} -> {handler.__class__.__name__}")

        if owners:
            raise ValueError(f"Handlers expose undefined tools: {sorted(owners)}")

        logger.info(f"✅ Registered {len(self._entries)} MCP tools across {len(handlers)} handlers")

    def list(self) -> List[ToolDefinition]:
        """All tool definitions in catalog order."""
        return list(self._definitions)

    def mcp_tools(self) -> List[Tool]:
        return [definition.to_mcp_tool() for definition in self._definitions]

    def resolve(self, name: str) -> RegisteredTool:
        """
        Look up a tool by exact name.

        Raises:
            ToolNotFoundError: If no tool has that name
        """
        entry = self._entries.get(name)
        if entry is None:
            raise ToolNotFoundError(f"Tool not found: {name}", {"tool": name})
        return entry
