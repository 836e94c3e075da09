from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from showroom.auth import require_admin
from showroom.catalog import rentals as rental_store
from showroom.models import RentalCreate, RentalUpdate

from .deps import get_db, ok


router = APIRouter(prefix="/rentals", tags=["rentals"])


@router.get("")
def list_rentals(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    brand: Optional[str] = None,
    search: Optional[str] = None,
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    sort: str = Query("createdAt"),
    order: str = Query("desc"),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    items, meta = rental_store.list_rentals(
        db,
        page=page,
        limit=limit,
        brand=brand,
        search=search,
        min_price=minPrice,
        max_price=maxPrice,
        sort=sort,
        order=order,
    )
    return ok([rental_store.public_rental(d) for d in items], **meta)


@router.get("/stats/overview")
def rental_stats(
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    return ok(rental_store.rental_stats(db))


@router.get("/{rental_id}")
def get_rental(rental_id: str, db: Database = Depends(get_db)) -> Dict[str, Any]:
    return ok(rental_store.public_rental(rental_store.get_rental(db, rental_id)))


@router.post("", status_code=201)
def create_rental(
    payload: RentalCreate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = rental_store.create_rental(db, payload)
    return ok(rental_store.public_rental(doc), message="Rental created successfully")


@router.put("/{rental_id}")
def update_rental(
    rental_id: str,
    payload: RentalUpdate,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    doc = rental_store.update_rental(db, rental_id, payload)
    return ok(rental_store.public_rental(doc), message="Rental updated successfully")


@router.delete("/{rental_id}")
def delete_rental(
    rental_id: str,
    db: Database = Depends(get_db),
    _admin: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, Any]:
    rental_store.delete_rental(db, rental_id)
    return ok(message="Rental deleted successfully")
