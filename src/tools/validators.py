"""Input validators: schema-driven normalization of tool arguments."""

import copy
import logging
import math
from typing import Any, Dict, Optional, Tuple

from core.exceptions import ToolArgumentError
from database.serialization import decode_extended_json
from tools.definitions import ParamSpec, ToolDefinition

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool is a subclass of int but never a valid number argument
    return isinstance(value, (int, float)) and not isinstance(value, bool)


_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "integer": _is_number,
    "number": _is_number,
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
}


class InputValidator:
    """General input validation utilities."""

    # Characters MongoDB does not allow in database names
    INVALID_DATABASE_CHARS = set('/\\. "$\x00')
    MAX_DATABASE_NAME_BYTES = 63

    @staticmethod
    def validate_collection_name(name: str) -> Tuple[bool, str]:
        """
        Validate collection name format.

        Args:
            name: Collection name to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name:
            return False, "Collection name cannot be empty"

        if "\x00" in name:
            return False, "Collection name cannot contain the null character"

        return True, ""

    @classmethod
    def validate_database_name(cls, name: str) -> Tuple[bool, str]:
        """
        Validate database name format.

        Args:
            name: Database name to validate

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not name:
            return False, "Database name cannot be empty"

        bad = sorted(cls.INVALID_DATABASE_CHARS.intersection(name))
        if bad:
            return False, f"Invalid characters in database name: {''.join(bad)!r}"

        if len(name.encode("utf-8")) > cls.MAX_DATABASE_NAME_BYTES:
            return False, f"Database name too long (max {cls.MAX_DATABASE_NAME_BYTES} bytes)"

        return True, ""


_NAME_VALIDATORS = {
    "collection": InputValidator.validate_collection_name,
    "database": InputValidator.validate_database_name,
}


def clamp(value: float, minimum: Optional[float], maximum: Optional[float]) -> float:
    """Bound value to the inclusive [minimum, maximum] range."""
    if minimum is not None and value < minimum:
        return minimum
    if maximum is not None and value > maximum:
        return maximum
    return value


class ArgumentValidator:
    """Apply a tool's parameter schema to raw call arguments.

    Normalization runs once per call, before any handler sees the arguments:
    defaults fill omitted values, numbers are clamped into their declared
    bounds, and anything missing or of the wrong type raises
    ToolArgumentError.
    """

    @classmethod
    def normalize(cls, definition: ToolDefinition, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ToolArgumentError(
                f"Arguments for tool '{definition.name}' must be an object",
                {"tool": definition.name}
            )

        unknown = set(arguments) - set(definition.parameters)
        if unknown:
            logger.debug(f"Ignoring unknown arguments for {definition.name}: {sorted(unknown)}")

        normalized: Dict[str, Any] = {}
        for name, spec in definition.parameters.items():
            value = arguments.get(name)

            if value is None:
                if spec.default is not None:
                    normalized[name] = copy.deepcopy(spec.default)
                elif spec.required:
                    raise ToolArgumentError(
                        f"Missing required argument '{name}' for tool '{definition.name}'",
                        {"tool": definition.name, "argument": name}
                    )
                continue

            normalized[name] = cls._coerce(definition.name, name, spec, value)

        return normalized

    @classmethod
    def _coerce(cls, tool: str, name: str, spec: ParamSpec, value: Any) -> Any:
        if not _TYPE_CHECKS[spec.type](value):
            raise ToolArgumentError(
                f"Argument '{name}' for tool '{tool}' must be of type {spec.type}, got {type(value).__name__}",
                {"tool": tool, "argument": name, "expected": spec.type}
            )

        if spec.type in ("integer", "number"):
            if not math.isfinite(value):
                raise ToolArgumentError(
                    f"Argument '{name}' for tool '{tool}' must be a finite number",
                    {"tool": tool, "argument": name}
                )
            bounded = clamp(value, spec.minimum, spec.maximum)
            if bounded != value:
                logger.info(f"Clamped {tool}.{name} from {value} to {bounded}")
            return int(bounded) if spec.type == "integer" else bounded

        if spec.type == "array" and spec.items:
            check = _TYPE_CHECKS[spec.items]
            for index, item in enumerate(value):
                if not check(item):
                    raise ToolArgumentError(
                        f"Argument '{name}[{index}]' for tool '{tool}' must be of type {spec.items}",
                        {"tool": tool, "argument": name, "index": index, "expected": spec.items}
                    )

        if spec.type == "string" and name in _NAME_VALIDATORS:
            is_valid, error_msg = _NAME_VALIDATORS[name](value)
            if not is_valid:
                raise ToolArgumentError(
                    f"Invalid '{name}' for tool '{tool}': {error_msg}",
                    {"tool": tool, "argument": name}
                )

        if spec.type in ("object", "array"):
            return decode_extended_json(value)

        return value
