from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database

from showroom.errors import NotFound, ValidationError
from showroom.models import BannerCreate, BannerUpdate
from showroom.schema import BANNERS
from showroom.util.documents import parse_object_id, try_object_id
from showroom.util.time import utcnow


NOT_FOUND = "Banner not found"

# Display order: explicit `order` first, newest first within the same slot.
DISPLAY_SORT = [("order", ASCENDING), ("createdAt", DESCENDING)]


def list_banners(db: Database, *, active: Optional[bool] = None) -> List[Dict[str, Any]]:
    query: Dict[str, Any] = {}
    if active is not None:
        query["isActive"] = active
    return list(db[BANNERS].find(query).sort(DISPLAY_SORT))


def get_banner(db: Database, banner_id: str) -> Dict[str, Any]:
    doc = db[BANNERS].find_one({"_id": parse_object_id(banner_id, what="Banner")})
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def create_banner(db: Database, payload: BannerCreate) -> Dict[str, Any]:
    now = utcnow()
    doc = payload.model_dump()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    res = db[BANNERS].insert_one(doc)
    doc["_id"] = res.inserted_id
    return doc


def _update(db: Database, banner_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    oid = parse_object_id(banner_id, what="Banner")
    fields = dict(fields)
    fields["updatedAt"] = utcnow()
    doc = db[BANNERS].find_one_and_update(
        {"_id": oid},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def update_banner(db: Database, banner_id: str, payload: BannerUpdate) -> Dict[str, Any]:
    return _update(db, banner_id, payload.fields_set_values())


def set_banner_status(db: Database, banner_id: str, is_active: bool) -> Dict[str, Any]:
    return _update(db, banner_id, {"isActive": bool(is_active)})


def delete_banner(db: Database, banner_id: str) -> None:
    res = db[BANNERS].delete_one({"_id": parse_object_id(banner_id, what="Banner")})
    if res.deleted_count == 0:
        raise NotFound(NOT_FOUND)


def reorder_banners(db: Database, ordered_ids: List[str]) -> Dict[str, Any]:
    """Assign `order = position` (0-based) following the given id list.

    Banners left out of the list keep their current order; gaps are fine because
    readers sort by (order, createdAt desc). Ids that no longer exist are reported
    back rather than failing the whole reorder.
    """
    errors: List[Dict[str, Any]] = []
    oids = []
    seen = set()
    for i, raw in enumerate(ordered_ids):
        oid = try_object_id(raw)
        if oid is None:
            errors.append({"field": f"orderedIds[{i}]", "message": "Invalid banner id"})
            continue
        if oid in seen:
            errors.append({"field": f"orderedIds[{i}]", "message": "Duplicate banner id"})
            continue
        seen.add(oid)
        oids.append(oid)
    if errors:
        raise ValidationError("Validation errors", errors=errors)

    now = utcnow()
    updated = 0
    missing: List[str] = []
    for position, oid in enumerate(oids):
        res = db[BANNERS].update_one({"_id": oid}, {"$set": {"order": position, "updatedAt": now}})
        if res.matched_count == 0:
            missing.append(str(oid))
        else:
            updated += 1
    return {"updated": updated, "missing": missing}
