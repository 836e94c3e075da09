from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from showroom.errors import NotFound
from showroom.util.time import iso_z


def parse_object_id(value: Any, *, what: str = "Resource") -> ObjectId:
    """Parse a path id. Malformed ids can't match anything, so they are a 404."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value or "").strip())
    except (InvalidId, TypeError):
        raise NotFound(f"{what} not found")


def try_object_id(value: Any) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    s = str(value or "").strip()
    if not ObjectId.is_valid(s):
        return None
    return ObjectId(s)


def to_json(value: Any) -> Any:
    """Convert a stored document (or any nested value) to JSON-friendly types."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return iso_z(value)
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def public_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if doc is None:
        return None
    return to_json(dict(doc))
