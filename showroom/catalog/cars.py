from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database

from showroom.catalog import integrity
from showroom.catalog.query import any_field_contains, contains_ci, group_counts, page_meta, price_range
from showroom.errors import NotFound, ValidationError
from showroom.models import CAR_STATUSES, CarCreate, CarUpdate
from showroom.schema import CARS
from showroom.util.documents import parse_object_id
from showroom.util.time import utcnow


NOT_FOUND = "Car not found"

SORTS: Dict[str, List[Tuple[str, int]]] = {
    "price-asc": [("price", ASCENDING)],
    "price-desc": [("price", DESCENDING)],
    "year-asc": [("year", ASCENDING)],
    "year-desc": [("year", DESCENDING)],
    "name": [("name", ASCENDING)],
}
DEFAULT_SORT = [("createdAt", DESCENDING)]


def build_car_query(
    *,
    search: Optional[str] = None,
    brand: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    year: Optional[int] = None,
    fuel_type: Optional[str] = None,
    transmission: Optional[str] = None,
    status: Optional[str] = None,
    featured: Optional[bool] = None,
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if search and search.strip():
        query.update(any_field_contains(("name", "brand", "model", "description"), search))
    if brand and brand.strip():
        query["brand"] = contains_ci(brand)
    if category:
        query["category"] = category
    rng = price_range(min_price, max_price)
    if rng:
        query["price"] = rng
    if year is not None:
        query["year"] = int(year)
    if fuel_type:
        query["specifications.fuelType"] = fuel_type
    if transmission:
        query["specifications.transmission"] = transmission
    if status:
        query["status"] = status
    if featured is not None:
        query["isFeatured"] = featured
    return query


def list_cars(
    db: Database,
    *,
    page: int = 1,
    limit: int = 10,
    sort: Optional[str] = None,
    **filters: Any,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """Filtered, sorted, paged car listing. Returns (cars, paging metadata)."""
    query = build_car_query(**filters)
    order = SORTS.get((sort or "").strip().lower(), DEFAULT_SORT)
    skip = (page - 1) * limit

    cars = list(db[CARS].find(query).sort(order).skip(skip).limit(limit))
    total = int(db[CARS].count_documents(query))
    return cars, page_meta(total=total, page=page, limit=limit, count=len(cars))


def list_featured(db: Database, *, limit: int = 6) -> List[Dict[str, Any]]:
    return list(
        db[CARS]
        .find({"isFeatured": True, "status": "available"})
        .sort("createdAt", DESCENDING)
        .limit(limit)
    )


def get_car(db: Database, car_id: str) -> Dict[str, Any]:
    doc = db[CARS].find_one({"_id": parse_object_id(car_id, what="Car")})
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def view_car(db: Database, car_id: str) -> Dict[str, Any]:
    """Fetch a car for display, counting the view (atomic +1)."""
    doc = db[CARS].find_one_and_update(
        {"_id": parse_object_id(car_id, what="Car")},
        {"$inc": {"views": 1}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def create_car(db: Database, payload: CarCreate) -> Dict[str, Any]:
    brand = integrity.require_brand(db, payload.brand)

    now = utcnow()
    doc = payload.model_dump()
    # Store the brand's canonical spelling so exact-match counting holds.
    doc["brand"] = brand["name"]
    doc["views"] = 0
    doc["createdAt"] = now
    doc["updatedAt"] = now
    res = db[CARS].insert_one(doc)
    doc["_id"] = res.inserted_id

    integrity.on_car_created(db, brand)
    return doc


def update_car(db: Database, car_id: str, payload: CarUpdate) -> Dict[str, Any]:
    current = get_car(db, car_id)
    fields = payload.fields_set_values()

    old_brand = new_brand = None
    if "brand" in fields:
        target = integrity.require_brand(db, fields["brand"])
        fields["brand"] = target["name"]
        if not integrity.same_brand(current.get("brand"), target["name"]):
            new_brand = target
            old_brand = integrity.resolve_brand(db, str(current.get("brand") or ""))

    fields["updatedAt"] = utcnow()
    doc = db[CARS].find_one_and_update(
        {"_id": current["_id"]},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)

    if new_brand is not None:
        integrity.on_car_reassigned(db, old_brand, new_brand)
    return doc


def delete_car(db: Database, car_id: str) -> None:
    doc = get_car(db, car_id)
    res = db[CARS].delete_one({"_id": doc["_id"]})
    if res.deleted_count == 0:
        raise NotFound(NOT_FOUND)
    integrity.on_car_deleted(db, str(doc.get("brand") or ""))


def set_car_status(db: Database, car_id: str, status: str) -> Dict[str, Any]:
    if status not in CAR_STATUSES:
        raise ValidationError.for_field("status", "Invalid status. Must be available, sold, or reserved")
    doc = db[CARS].find_one_and_update(
        {"_id": parse_object_id(car_id, what="Car")},
        {"$set": {"status": status, "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def toggle_featured(db: Database, car_id: str) -> Dict[str, Any]:
    """Flip isFeatured.

    Compare-and-set on the value we read: if another toggle landed in between, the
    write misses and we re-read, so concurrent toggles each flip the flag once.
    """
    while True:
        current = get_car(db, car_id)
        seen = current.get("isFeatured")
        doc = db[CARS].find_one_and_update(
            {"_id": current["_id"], "isFeatured": seen},
            {"$set": {"isFeatured": not bool(seen), "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is not None:
            return doc


def _grouped(db: Database, field: str, *, limit: int | None = None) -> List[Dict[str, Any]]:
    pipeline: List[Dict[str, Any]] = [
        {"$group": {"_id": f"${field}", "count": {"$sum": 1}}},
        {"$sort": {"count": -1, "_id": 1}},
    ]
    if limit is not None:
        pipeline.append({"$limit": limit})
    return group_counts(list(db[CARS].aggregate(pipeline)))


def car_stats(db: Database) -> Dict[str, Any]:
    coll = db[CARS]
    return {
        "overview": {
            "totalCars": int(coll.count_documents({})),
            "availableCars": int(coll.count_documents({"status": "available"})),
            "soldCars": int(coll.count_documents({"status": "sold"})),
            "reservedCars": int(coll.count_documents({"status": "reserved"})),
            "featuredCars": int(coll.count_documents({"isFeatured": True})),
        },
        "carsByStatus": _grouped(db, "status"),
        "carsByCategory": _grouped(db, "category"),
        "carsByBrand": _grouped(db, "brand", limit=10),
    }
