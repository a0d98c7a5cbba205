"""Response envelopes and tool outcomes shared by every transport.

A request always produces exactly one envelope: either a success payload
(``{"content": [...]}`` for tool calls) or ``{"error": {...}}``.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from core.exceptions import MCPMongoError

logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    """JSON-RPC error codes used in error envelopes."""
    METHOD_NOT_FOUND = -32601
    INTERNAL_ERROR = -32603


INTERNAL_ERROR_MESSAGE = "Internal server error"


def success_envelope(text: str) -> Dict[str, Any]:
    """Wrap text in a tool success envelope."""
    return {
        "content": [{
            "type": "text",
            "text": text
        }]
    }


def error_envelope(
    code: ErrorCode,
    message: str,
    data: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Build an error envelope.

    Args:
        code: JSON-RPC error code
        message: Human-readable error message
        data: Optional structured details

    Returns:
        Envelope of the form ``{"error": {"code", "message", "data"?}}``
    """
    error: Dict[str, Any] = {
        "code": int(code),
        "message": message
    }
    if data is not None:
        error["data"] = data
    return {"error": error}


def is_error_envelope(envelope: Dict[str, Any]) -> bool:
    return "error" in envelope


@dataclass(frozen=True)
class ToolOutcome:
    """Result of a tool invocation: success text or a captured failure."""

    text: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, text: str) -> "ToolOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, error: BaseException) -> "ToolOutcome":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_envelope(self) -> Dict[str, Any]:
        """Convert the outcome to its response envelope.

        Failures of any kind map to an internal-error envelope carrying the
        underlying message as ``data.details``.
        """
        if self.ok:
            return success_envelope(self.text or "")

        data: Dict[str, Any] = {"details": str(self.error)}
        if isinstance(self.error, MCPMongoError):
            data["type"] = self.error.__class__.__name__
            if self.error.details:
                data["context"] = self.error.details
        return error_envelope(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE, data)
