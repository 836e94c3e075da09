"""Collection layout for the car showroom document store.

MongoDB is schemaless; validation happens in `showroom.models` before writes.
What we do declare here is the set of indexes each collection needs:

- uniqueness that must hold even under concurrent writers (user email, brand name)
- the sort/filter keys used by the public listing endpoints

NOTE: Brand name uniqueness is case-insensitive at the application layer. The unique
index only guards exact duplicates that slip past that check in a race.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pymongo import ASCENDING, DESCENDING


USERS = "users"
BANNERS = "banners"
BRANDS = "brands"
CARS = "cars"
RENTALS = "rentals"

COLLECTIONS = (USERS, BANNERS, BRANDS, CARS, RENTALS)


# (keys, options)
IndexSpec = Tuple[List[Tuple[str, int]], Dict[str, Any]]


INDEXES: Dict[str, List[IndexSpec]] = {
    USERS: [
        ([("email", ASCENDING)], {"unique": True, "name": "uniq_email"}),
    ],
    BANNERS: [
        ([("order", ASCENDING), ("isActive", ASCENDING)], {"name": "order_active"}),
    ],
    BRANDS: [
        ([("name", ASCENDING)], {"unique": True, "name": "uniq_name"}),
        ([("order", ASCENDING), ("isActive", ASCENDING)], {"name": "order_active"}),
    ],
    CARS: [
        ([("brand", ASCENDING), ("model", ASCENDING)], {"name": "brand_model"}),
        ([("price", ASCENDING)], {"name": "price"}),
        ([("year", ASCENDING)], {"name": "year"}),
        ([("status", ASCENDING)], {"name": "status"}),
        ([("category", ASCENDING)], {"name": "category"}),
        ([("isFeatured", ASCENDING), ("createdAt", DESCENDING)], {"name": "featured_recent"}),
    ],
    RENTALS: [
        ([("availableDate", ASCENDING)], {"name": "available_date"}),
        ([("pricePerDay", ASCENDING)], {"name": "price_per_day"}),
        ([("brand", ASCENDING)], {"name": "brand"}),
        ([("name", ASCENDING)], {"name": "name"}),
    ],
}


def get_index_specs(collection: str) -> List[IndexSpec]:
    return list(INDEXES.get(collection, []))
