from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.database import Database

from showroom.catalog.query import any_field_contains, group_counts, page_meta, price_range
from showroom.errors import NotFound
from showroom.models import RentalCreate, RentalUpdate
from showroom.schema import RENTALS
from showroom.util.documents import parse_object_id, public_doc
from showroom.util.time import utcnow


NOT_FOUND = "Rental not found"

SORT_FIELDS = ("createdAt", "pricePerDay", "availableDate", "name", "brand")


def public_rental(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = public_doc(doc) or {}
    # Older clients read the daily price under this name.
    out["dailyRate"] = out.get("pricePerDay")
    return out


def list_rentals(
    db: Database,
    *,
    page: int = 1,
    limit: int = 10,
    brand: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    query: Dict[str, Any] = {}
    if brand and brand.strip():
        query["brand"] = brand.strip()
    if search and search.strip():
        query.update(any_field_contains(("name", "brand", "model", "description"), search))
    rng = price_range(min_price, max_price)
    if rng:
        query["pricePerDay"] = rng

    sort_field = sort if sort in SORT_FIELDS else "createdAt"
    direction = ASCENDING if (order or "").strip().lower() == "asc" else DESCENDING
    skip = (page - 1) * limit

    rentals = list(db[RENTALS].find(query).sort(sort_field, direction).skip(skip).limit(limit))
    total = int(db[RENTALS].count_documents(query))
    return rentals, page_meta(total=total, page=page, limit=limit, count=len(rentals))


def get_rental(db: Database, rental_id: str) -> Dict[str, Any]:
    doc = db[RENTALS].find_one({"_id": parse_object_id(rental_id, what="Rental")})
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def create_rental(db: Database, payload: RentalCreate) -> Dict[str, Any]:
    now = utcnow()
    doc = payload.model_dump()
    doc["createdAt"] = now
    doc["updatedAt"] = now
    res = db[RENTALS].insert_one(doc)
    doc["_id"] = res.inserted_id
    return doc


def update_rental(db: Database, rental_id: str, payload: RentalUpdate) -> Dict[str, Any]:
    fields = payload.fields_set_values()
    fields["updatedAt"] = utcnow()
    doc = db[RENTALS].find_one_and_update(
        {"_id": parse_object_id(rental_id, what="Rental")},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise NotFound(NOT_FOUND)
    return doc


def delete_rental(db: Database, rental_id: str) -> None:
    res = db[RENTALS].delete_one({"_id": parse_object_id(rental_id, what="Rental")})
    if res.deleted_count == 0:
        raise NotFound(NOT_FOUND)


def rental_stats(db: Database) -> Dict[str, Any]:
    coll = db[RENTALS]

    price = list(
        coll.aggregate(
            [
                {
                    "$group": {
                        "_id": None,
                        "avgPrice": {"$avg": "$pricePerDay"},
                        "minPrice": {"$min": "$pricePerDay"},
                        "maxPrice": {"$max": "$pricePerDay"},
                    }
                }
            ]
        )
    )
    p = price[0] if price else {}

    brands = group_counts(
        list(
            coll.aggregate(
                [
                    {"$group": {"_id": "$brand", "count": {"$sum": 1}}},
                    {"$sort": {"count": -1, "_id": 1}},
                    {"$limit": 5},
                ]
            )
        )
    )

    monthly = list(
        coll.aggregate(
            [
                {
                    "$group": {
                        "_id": {"year": {"$year": "$createdAt"}, "month": {"$month": "$createdAt"}},
                        "count": {"$sum": 1},
                    }
                },
                {"$sort": {"_id.year": -1, "_id.month": -1}},
                {"$limit": 12},
            ]
        )
    )

    return {
        "overview": {
            "totalRentals": int(coll.count_documents({})),
            "averagePrice": float(p.get("avgPrice") or 0),
            "minPrice": float(p.get("minPrice") or 0),
            "maxPrice": float(p.get("maxPrice") or 0),
        },
        "brandStats": brands,
        "monthlyStats": [{"_id": m["_id"], "count": int(m["count"])} for m in monthly],
    }
