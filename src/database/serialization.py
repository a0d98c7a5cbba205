"""BSON <-> text conversion for tool arguments and results."""

import json
from typing import Any, Dict, List, Tuple

from bson import json_util

_RELAXED = json_util.JSONOptions(json_mode=json_util.JSONMode.RELAXED)

# Extended JSON markers and the keys their wrapper documents may hold.
# A document carrying a marker next to any other key is a query, not a value.
_WRAPPER_KEYS = {
    "$oid": {"$oid"},
    "$date": {"$date"},
    "$numberInt": {"$numberInt"},
    "$numberLong": {"$numberLong"},
    "$numberDouble": {"$numberDouble"},
    "$numberDecimal": {"$numberDecimal"},
    "$regex": {"$regex", "$options"},
    "$regularExpression": {"$regularExpression"},
    "$binary": {"$binary", "$type"},
    "$uuid": {"$uuid"},
    "$timestamp": {"$timestamp"},
    "$minKey": {"$minKey"},
    "$maxKey": {"$maxKey"},
}


def _decode_wrapper(pairs: List[Tuple[str, Any]]) -> Any:
    document: Dict[str, Any] = dict(pairs)
    for marker, allowed in _WRAPPER_KEYS.items():
        if marker in document:
            if document.keys() <= allowed:
                return json_util.object_hook(document, _RELAXED)
            return document
    return document


def to_json_text(value: Any) -> str:
    """Serialize driver results as indented relaxed Extended JSON."""
    return json_util.dumps(value, json_options=_RELAXED, indent=2)


def decode_extended_json(value: Any) -> Any:
    """Turn Extended JSON wrappers (``{"$oid": ...}``, ``{"$date": ...}``) into BSON types.

    Only documents that consist of a wrapper and nothing else are converted;
    query documents such as ``{"$regex": "^a", "$ne": "alpha"}`` come back
    unchanged, as do plain JSON values.
    """
    return json.loads(json.dumps(value), object_pairs_hook=_decode_wrapper)
