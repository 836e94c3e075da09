from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from showroom.catalog import integrity
from showroom.catalog.query import any_field_contains
from showroom.errors import Conflict, NotFound
from showroom.models import BrandCreate, BrandUpdate
from showroom.schema import BRANDS, CARS
from showroom.util.documents import parse_object_id
from showroom.util.time import utcnow


NOT_FOUND = "Brand not found"
DUPLICATE = "Brand with this name already exists"


def _debug(msg: str) -> None:
    print(f"[brands] {msg}")


def list_brands(db: Database, *, active: Optional[bool] = None, search: Optional[str] = None) -> List[Dict[str, Any]]:
    query: Dict[str, Any] = {}
    if active is not None:
        query["isActive"] = active
    if search and search.strip():
        query.update(any_field_contains(("name", "description"), search))
    return list(db[BRANDS].find(query).sort([("order", ASCENDING), ("name", ASCENDING)]))


def get_brand(db: Database, brand_id: str) -> Dict[str, Any]:
    doc = db[BRANDS].find_one({"_id": parse_object_id(brand_id, what="Brand")})
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def get_brand_with_live_count(db: Database, brand_id: str) -> Dict[str, Any]:
    doc = get_brand(db, brand_id)
    doc["carCount"] = integrity.count_cars(db, str(doc["name"]))
    return doc


def get_brand_by_name(db: Database, name: str) -> Dict[str, Any]:
    """Case-insensitive lookup, with the brand's cars (newest first)."""
    doc = integrity.resolve_brand(db, name)
    if doc is None:
        raise NotFound(NOT_FOUND)
    doc["cars"] = list(db[CARS].find({"brand": doc["name"]}).sort("createdAt", DESCENDING))
    return doc


def _ensure_unique_name(db: Database, name: str, *, exclude_id=None) -> None:
    query = integrity.brand_name_filter(name)
    if exclude_id is not None:
        query["_id"] = {"$ne": exclude_id}
    if db[BRANDS].find_one(query, {"_id": 1}) is not None:
        raise Conflict(DUPLICATE)


def create_brand(db: Database, payload: BrandCreate) -> Dict[str, Any]:
    _ensure_unique_name(db, payload.name)

    now = utcnow()
    doc = payload.model_dump()
    # Derived; only the integrity maintainer writes it.
    doc["carCount"] = 0
    doc["createdAt"] = now
    doc["updatedAt"] = now
    try:
        res = db[BRANDS].insert_one(doc)
    except DuplicateKeyError:
        raise Conflict(DUPLICATE)
    doc["_id"] = res.inserted_id
    return doc


def update_brand(db: Database, brand_id: str, payload: BrandUpdate) -> Dict[str, Any]:
    """Update a brand.

    A rename is carried over to the cars that referenced the old name, so that
    `carCount` keeps describing the same set of cars.
    """
    current = get_brand(db, brand_id)
    fields = payload.fields_set_values()

    new_name = fields.get("name")
    renamed = new_name is not None and new_name != current["name"]
    if renamed:
        _ensure_unique_name(db, new_name, exclude_id=current["_id"])

    fields["updatedAt"] = utcnow()
    try:
        doc = db[BRANDS].find_one_and_update(
            {"_id": current["_id"]},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
    except DuplicateKeyError:
        raise Conflict(DUPLICATE)
    if doc is None:
        raise NotFound(NOT_FOUND)

    if renamed:
        res = db[CARS].update_many(
            {"brand": current["name"]},
            {"$set": {"brand": new_name, "updatedAt": utcnow()}},
        )
        _debug(f"renamed brand {current['name']!r} -> {new_name!r}; moved {res.modified_count} cars")
    return doc


def set_brand_status(db: Database, brand_id: str, is_active: bool) -> Dict[str, Any]:
    oid = parse_object_id(brand_id, what="Brand")
    doc = db[BRANDS].find_one_and_update(
        {"_id": oid},
        {"$set": {"isActive": bool(is_active), "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def delete_brand(db: Database, brand_id: str) -> None:
    doc = get_brand(db, brand_id)
    n = integrity.count_cars(db, str(doc["name"]))
    if n > 0:
        raise Conflict(f"Cannot delete brand. {n} cars are associated with this brand.")
    db[BRANDS].delete_one({"_id": doc["_id"]})


def recompute_car_count(db: Database, brand_id: str) -> Dict[str, Any]:
    oid = parse_object_id(brand_id, what="Brand")
    doc = integrity.recompute_car_count(db, oid)
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc
