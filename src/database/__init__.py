"""Database access for MCP MongoDB Server."""

from .connection import MongoConnection
from .serialization import to_json_text, decode_extended_json

__all__ = [
    "MongoConnection",
    "to_json_text",
    "decode_extended_json"
]
