"""Brand <-> Car referential integrity.

Cars reference their brand by a denormalized name string (`Car.brand == Brand.name`),
not by id. Each Brand caches how many cars point at it in `carCount`:

    Brand.carCount == count(Car where Car.brand == Brand.name)

The count is maintained incrementally as cars are created, reassigned and deleted.
Counter writes use MongoDB's atomic `$inc`, so concurrent car writes against the same
brand cannot lose updates. The car write and the counter write(s) are still separate
operations; if a counter write fails after the car write succeeded we recompute the
affected brands from the cars collection before re-raising. The same recompute is
exposed to admins (`PATCH /brands/:id/update-car-count`) as a repair path.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from showroom.errors import ValidationError
from showroom.schema import BRANDS, CARS
from showroom.util.time import utcnow


BRAND_NOT_FOUND = "Brand not found. Please create the brand first."


def _debug(msg: str) -> None:
    print(f"[integrity] {msg}")


def brand_name_filter(name: str) -> Dict[str, Any]:
    """Case-insensitive exact match on Brand.name."""
    return {"name": {"$regex": f"^{re.escape((name or '').strip())}$", "$options": "i"}}


def resolve_brand(db: Database, name: str) -> Optional[Dict[str, Any]]:
    if not (name or "").strip():
        return None
    return db[BRANDS].find_one(brand_name_filter(name))


def require_brand(db: Database, name: str) -> Dict[str, Any]:
    brand = resolve_brand(db, name)
    if brand is None:
        raise ValidationError(BRAND_NOT_FOUND, errors=[{"field": "brand", "message": BRAND_NOT_FOUND}])
    return brand


def same_brand(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").strip().lower() == (b or "").strip().lower()


def count_cars(db: Database, brand_name: str) -> int:
    return int(db[CARS].count_documents({"brand": brand_name}))


def adjust_car_count(db: Database, brand_id: ObjectId, delta: int) -> None:
    if delta == 0:
        return
    flt: Dict[str, Any] = {"_id": brand_id}
    if delta < 0:
        # Never drive the cached count negative; drift is left for recompute.
        flt["carCount"] = {"$gte": -delta}
    res = db[BRANDS].update_one(flt, {"$inc": {"carCount": delta}})
    if res.matched_count == 0 and delta < 0:
        _debug(f"carCount already at zero for brand {brand_id}; decrement skipped")


def recompute_car_count(db: Database, brand_id: ObjectId) -> Optional[Dict[str, Any]]:
    """Overwrite a brand's carCount with the live number of cars referencing it."""
    brand = db[BRANDS].find_one({"_id": brand_id}, {"name": 1})
    if brand is None:
        return None
    n = count_cars(db, str(brand["name"]))
    return db[BRANDS].find_one_and_update(
        {"_id": brand_id},
        {"$set": {"carCount": n, "updatedAt": utcnow()}},
        return_document=ReturnDocument.AFTER,
    )


def recompute_all(db: Database) -> int:
    n = 0
    for brand in db[BRANDS].find({}, {"_id": 1}):
        recompute_car_count(db, brand["_id"])
        n += 1
    return n


@contextmanager
def compensating(db: Database, *brands: Optional[Dict[str, Any]]) -> Iterator[None]:
    """Run counter writes; on failure, recompute the touched brands and re-raise."""
    try:
        yield
    except Exception:
        for brand in brands:
            if brand is None:
                continue
            _debug(f"counter update failed; recomputing carCount for brand {brand.get('name')!r}")
            try:
                recompute_car_count(db, brand["_id"])
            except Exception as e:
                _debug(f"recompute failed for brand {brand.get('name')!r}: {e}")
        raise


def on_car_created(db: Database, brand: Dict[str, Any]) -> None:
    with compensating(db, brand):
        adjust_car_count(db, brand["_id"], +1)


def on_car_reassigned(db: Database, old_brand: Optional[Dict[str, Any]], new_brand: Dict[str, Any]) -> None:
    with compensating(db, old_brand, new_brand):
        if old_brand is not None:
            adjust_car_count(db, old_brand["_id"], -1)
        adjust_car_count(db, new_brand["_id"], +1)


def on_car_deleted(db: Database, brand_name: str) -> None:
    # Orphaned brand strings are tolerated: nothing to decrement.
    brand = resolve_brand(db, brand_name)
    if brand is None:
        return
    with compensating(db, brand):
        adjust_car_count(db, brand["_id"], -1)
